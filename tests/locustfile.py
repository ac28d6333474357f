from locust import HttpUser, task, between

class DashboardApiPerformanceTest(HttpUser):
    wait_time = between(1, 3)

    @task(3)
    def test_stock_prices(self):
        self.client.get("/api/stocks")

    @task
    def test_transcript(self):
        self.client.get("/api/transcript", params={"ticker": "MSFT", "year": 2024, "quarter": 2})

    @task
    def test_preflight(self):
        self.client.options("/api/stocks")
