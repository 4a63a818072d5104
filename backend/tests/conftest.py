import pytest
from fastapi.testclient import TestClient

from boligscore.api.deps import get_catalog
from boligscore.main import app
from boligscore.scoring.models import Property
from boligscore.services.catalog import PropertyCatalog

# Fixed reference year so age scores do not drift
CURRENT_YEAR = 2025

RATING_FIELDS = [
    "kitchenQuality", "livingRoomQuality", "storageQuality", "floorPlanQuality",
    "balconyTerraceQuality", "lightAndAirQuality", "areaImpression", "neighborhoodImpression",
    "publicTransportAccess", "schoolsProximity", "viewingImpression", "potentialScore",
]

@pytest.fixture
def catalog():
    """Empty catalog scored against CURRENT_YEAR."""
    return PropertyCatalog(current_year=CURRENT_YEAR)

@pytest.fixture
def client(catalog):
    """Create a test client backed by a fresh catalog."""
    app.dependency_overrides[get_catalog] = lambda: catalog
    yield TestClient(app)
    app.dependency_overrides.clear()

@pytest.fixture
def sample_property_data():
    """A mid-range apartment with every 0-10 rating set to 5."""
    data = {
        "address": "Storgata 1, 0155 Oslo",
        "price": 3_000_000,
        "area": 60,
        "propertyType": "Leilighet",
        "condition": "God",
        "location": "Gjennomsnittlig",
        "parkingSpots": 0,
        "hasGarage": False,
        "gardenSize": 0,
        "hasRentalUnit": False,
        "renovationNeeds": "",
        "otherAttributes": "Heis",
        "yearBuilt": 2000,
        "bedrooms": 2,
        "bathrooms": 1,
    }
    data.update({field: 5 for field in RATING_FIELDS})
    return data

@pytest.fixture
def sample_property(sample_property_data):
    return Property.model_validate({**sample_property_data, "id": "prop1"})
