import pytest
from fastapi.testclient import TestClient

def test_list_criteria(client: TestClient):
    response = client.get("/api/v1/scoring/criteria")
    assert response.status_code == 200
    data = response.json()
    assert len(data) == 22
    assert data[0] == {
        "id": "Pris per kvm",
        "label": "Pris per kvm",
        "description": "Vurderer pris i forhold til areal. Lavere er bedre.",
        "defaultWeight": 15,
        "minWeight": None,
        "maxWeight": None,
        "step": None,
    }
    kitchen = next(c for c in data if c["id"] == "Kjøkkenkvalitet")
    assert kitchen["maxWeight"] == 20

def test_default_weights(client: TestClient):
    response = client.get("/api/v1/scoring/weights/default")
    assert response.status_code == 200
    data = response.json()
    assert len(data) == 22
    assert data["Pris per kvm"] == 15
    assert sum(data.values()) == 184

def test_evaluate_property(client: TestClient, sample_property_data):
    response = client.post(
        "/api/v1/scoring/evaluate",
        json={"property": sample_property_data, "current_year": 2025}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["totalScore"] == 52
    assert len(data["scores"]) == 22
    assert data["scores"]["Pris per kvm"]["description"] == "Pris/kvm: 50\u00a0000 kr"
    assert data["scores"]["Antall Soverom"] == {"score": 70.0, "description": "2 soverom"}

def test_evaluate_with_partial_weights(client: TestClient, sample_property_data):
    weights = {"Pris per kvm": 0, "Størrelse (BRA)": 0}
    response = client.post(
        "/api/v1/scoring/evaluate",
        json={"property": sample_property_data, "weights": weights, "current_year": 2025}
    )
    assert response.status_code == 200
    assert response.json()["totalScore"] != 52

def test_evaluate_does_not_store(client: TestClient, sample_property_data):
    client.post("/api/v1/scoring/evaluate", json={"property": sample_property_data})
    assert client.get("/api/v1/properties/").json()["total"] == 0

@pytest.mark.parametrize("weights,error_code", [
    ({"Svømmebasseng": 3}, "UNKNOWN_CRITERION"),
    ({"Hage": -1}, "INVALID_WEIGHT"),
])
def test_evaluate_rejects_bad_weights(client: TestClient, sample_property_data, weights, error_code):
    response = client.post("/api/v1/scoring/evaluate", json={"property": sample_property_data, "weights": weights})
    assert response.status_code == 422
    assert response.json()["detail"]["error_code"] == error_code

def test_evaluate_degenerate_property(client: TestClient):
    response = client.post("/api/v1/scoring/evaluate", json={"property": {"price": "ukjent", "area": None}})
    assert response.status_code == 200
    data = response.json()
    assert data["scores"]["Pris per kvm"] == {"score": 0.0, "description": "Areal mangler"}
    assert 0 <= data["totalScore"] <= 100
