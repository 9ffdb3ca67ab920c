import os
import random
import uuid

from locust import HttpUser, between, task

# Any non-blank token passes the gate
TOKEN = os.getenv("API_TOKEN", "secret")


class UserManagementUser(HttpUser):
    wait_time = between(1, 2)

    def on_start(self):
        self.client.headers["Authorization"] = f"Bearer {TOKEN}"
        self.created_ids = []

    @task(3)
    def list_users(self):
        self.client.get("/users")

    @task(2)
    def create_user(self):
        suffix = uuid.uuid4().hex[:8]
        r = self.client.post("/users", json={"name": f"load-{suffix}", "email": f"load-{suffix}@example.com"})
        if r.status_code == 201:
            self.created_ids.append(r.json()["id"])

    @task(1)
    def get_user(self):
        if not self.created_ids:
            return
        user_id = random.choice(self.created_ids)
        # group by route, not by id
        self.client.get(f"/users/{user_id}", name="/users/[id]")

    @task(1)
    def delete_user(self):
        if not self.created_ids:
            return
        user_id = self.created_ids.pop()
        self.client.delete(f"/users/{user_id}", name="/users/[id]")
