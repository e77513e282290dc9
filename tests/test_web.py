import pytest

from mortgage_calc_web.app import app

CANONICAL = {
    "principal": 750000,
    "annual_rate_percent": 4.5,
    "amortization_years": 25,
    "payment_frequency": "monthly",
    "compounding_method": "semi-annual",
}


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


class TestSummaryEndpoint:
    def test_plain_loan(self, client):
        response = client.post("/api/summary", json=CANONICAL)
        assert response.status_code == 200
        data = response.get_json()
        assert data["result"]["regular_payment"] == pytest.approx(4151.05)
        assert data["result"]["payoff_months"] == 300
        assert data["comparison"] is None

    def test_with_extras(self, client):
        response = client.post("/api/summary", json=dict(CANONICAL, extra_yearly=25000))
        data = response.get_json()
        assert data["result"]["payoff_months"] == 157
        assert data["comparison"]["months_saved"] == 143
        assert data["comparison"]["interest_saved"] > 0

    @pytest.mark.parametrize(
        "change",
        [
            {"principal": -1},
            {"annual_rate_percent": 0},
            {"amortization_years": 2.5},
            {"payment_frequency": "daily"},
            {"one_time_payment": 750000},
            {"extra_yearly": -10},
            {"principal": "lots"},
        ],
    )
    def test_rejects_invalid_input(self, client, change):
        response = client.post("/api/summary", json=dict(CANONICAL, **change))
        assert response.status_code == 400
        assert "error" in response.get_json()

    def test_missing_field(self, client):
        body = dict(CANONICAL)
        del body["principal"]
        response = client.post("/api/summary", json=body)
        assert response.status_code == 400
        assert "principal" in response.get_json()["error"]

    def test_not_json(self, client):
        response = client.post("/api/summary", data="principal=1")
        assert response.status_code == 400


class TestScheduleEndpoint:
    def test_payment_view(self, client):
        response = client.post("/api/schedule", json=dict(CANONICAL, payment_frequency="accelerated-bi-weekly"))
        data = response.get_json()
        assert data["status"] == "paid_off"
        assert data["regular_payment"] == pytest.approx(2075.52)
        assert data["schedule"][0]["payment_number"] == 1
        assert data["schedule"][-1]["balance"] == 0

    def test_annual_view(self, client):
        response = client.post("/api/schedule?view=annual", json=CANONICAL)
        data = response.get_json()
        assert len(data["schedule"]) == 25

    def test_unknown_view(self, client):
        response = client.post("/api/schedule?view=daily", json=CANONICAL)
        assert response.status_code == 400


class TestFrequenciesEndpoint:
    def test_lists_frequencies(self, client):
        data = client.get("/api/frequencies").get_json()
        assert [f["payments_per_year"] for f in data] == [12, 24, 26, 26, 52, 52]
        assert data[3]["label"] == "Accelerated Bi-Weekly"
