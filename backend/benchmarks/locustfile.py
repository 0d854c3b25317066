from locust import HttpUser, task, between

class MaintenanceUser(HttpUser):
    wait_time = between(1, 3)

    def on_start(self):
        r = self.client.get("/api/equipment")
        items = r.json().get("data", []) if r.status_code == 200 else []
        if not items:
            r = self.client.post(
                "/api/equipment",
                json={"name": "bench press", "serial_number": "BENCH-001"},
            )
            items = [r.json()["data"]]
        self.equipment_id = items[0]["id"]

    @task(3)
    def list_requests(self):
        self.client.get("/api/requests")

    @task(2)
    def admin_stats(self):
        self.client.get("/api/admin/stats")

    @task(1)
    def create_request(self):
        data = {"subject": "bench request", "equipment_id": self.equipment_id}
        self.client.post("/api/requests", json=data)
