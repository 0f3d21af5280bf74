from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest

IST = ZoneInfo("Asia/Kolkata")


@pytest.fixture
def due():
    return date(2025, 1, 1)


@pytest.fixture
def ten_days_late():
    """Exactly ten full days after local midnight of the due date."""
    return datetime(2025, 1, 11, 0, 0, tzinfo=IST)


@pytest.fixture
def challan_json():
    """Challan as the API sends it (camelCase, 8000 subtotal)."""
    return {
        "challanNumber": "CH-2025-0001",
        "partyId": "64f0c0ffee",
        "issueDate": "2024-12-02",
        "dueDate": "2025-01-01",
        "status": "Open",
        "items": [
            {
                "qualityName": "Rapier 60x60",
                "orderedMeters": 100,
                "weightPerMeter": 0.25,
                "pricePerMeter": 50,
                "calculatedWeight": 25,
                "calculatedAmount": 5000,
            },
            {
                "qualityName": "Airjet 40s",
                "orderedMeters": 50,
                "weightPerMeter": 0.3,
                "pricePerMeter": 60,
                "calculatedWeight": 15,
                "calculatedAmount": 3000,
            },
        ],
        "totals": {
            "totalMeters": 150,
            "totalWeight": 40,
            "subtotalAmount": 8000,
        },
        "interestTracking": {
            "principalAmount": 10000,
            "interestRate": 1,
            "interestType": "simple",
        },
        "payments": [],
    }
