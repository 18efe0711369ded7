#!/usr/bin/env python3
"""Simple API test script to verify the service is working."""

import requests
import uuid

BASE_URL = "http://localhost:8000"
QUOTE_DATE = "2026-01-06"

def test_health():
    """Test health endpoint."""
    print("Testing health endpoint...")
    response = requests.get(f"{BASE_URL}/health")
    print(f"  Status: {response.status_code}")
    print(f"  Response: {response.json()}")
    assert response.status_code == 200
    print("  ✓ Health check passed\n")

def test_api_docs():
    """Test that API docs are accessible."""
    print("Testing API documentation...")
    response = requests.get(f"{BASE_URL}/docs")
    print(f"  Status: {response.status_code}")
    assert response.status_code == 200
    print("  ✓ API docs accessible at /docs\n")

def test_create_club():
    """Test creating a club."""
    print("Testing club creation...")
    club_data = {
        "name": "Test Club Kyiv",
        "slug": f"test-club-{uuid.uuid4().hex[:8]}",
        "city": "Kyiv",
        "country": "Ukraine",
        "timezone": "Europe/Kyiv"
    }

    response = requests.post(f"{BASE_URL}/clubs", json=club_data)
    print(f"  Status: {response.status_code}")
    assert response.status_code == 201
    club = response.json()
    print(f"  Created club ID: {club['id']}")
    print("  ✓ Club creation passed\n")
    return club['id']

def test_create_court(club_id):
    """Test creating a court with a default price."""
    print(f"Testing court creation for club {club_id}...")
    court_data = {"name": "Court 1", "sport_type": "padel", "default_price_cents": 1000}

    response = requests.post(f"{BASE_URL}/clubs/{club_id}/courts", json=court_data)
    print(f"  Status: {response.status_code}")
    assert response.status_code == 201
    court = response.json()
    print(f"  Created court ID: {court['id']}")
    print("  ✓ Court creation passed\n")
    return court['id']

def test_price_rules(court_id):
    """Test creating a weekday rule and a date override."""
    print(f"Testing price rules for court {court_id}...")

    rules = [
        {"rule_type": "WEEKDAYS", "start_time": "09:00", "end_time": "12:00", "price_cents": 1500},
        {"rule_type": "SPECIFIC_DATE", "date": QUOTE_DATE,
         "start_time": "10:00", "end_time": "10:30", "price_cents": 3000},
    ]
    for rule in rules:
        response = requests.post(f"{BASE_URL}/courts/{court_id}/price-rules", json=rule)
        print(f"  {rule['rule_type']}: {response.status_code}")
        assert response.status_code == 201

    response = requests.get(f"{BASE_URL}/courts/{court_id}/price-rules")
    print(f"  Found {len(response.json())} rule(s)")
    print("  ✓ Price rules created\n")

def test_price_timeline(court_id):
    """Test the day timeline."""
    print(f"Testing price timeline for {QUOTE_DATE}...")
    response = requests.get(
        f"{BASE_URL}/courts/{court_id}/price-timeline", params={"date": QUOTE_DATE}
    )
    print(f"  Status: {response.status_code}")
    assert response.status_code == 200
    for segment in response.json()["segments"]:
        print(f"  {segment['start']}-{segment['end']}: {segment['price_cents']} cents/h")
    print("  ✓ Timeline passed\n")

def test_price_quote(court_id):
    """Test pricing a one hour booking."""
    print("Testing price quote for 10:00 + 60 minutes...")
    params = {"date": QUOTE_DATE, "start_time": "10:00", "duration_minutes": 60}
    response = requests.get(f"{BASE_URL}/courts/{court_id}/price-quote", params=params)
    print(f"  Status: {response.status_code}")
    assert response.status_code == 200
    quote = response.json()
    print(f"  Total: {quote['total_price_cents']} cents")
    assert quote["total_price_cents"] == 2250
    print("  ✓ Quote passed\n")

def main():
    """Run all tests."""
    print("=" * 60)
    print("COURT PRICING - API TEST SUITE")
    print("=" * 60)
    print()

    try:
        # Basic tests
        test_health()
        test_api_docs()

        # Database tests
        club_id = test_create_club()
        court_id = test_create_court(club_id)
        test_price_rules(court_id)
        test_price_timeline(court_id)
        test_price_quote(court_id)

        print("=" * 60)
        print("ALL TESTS PASSED! ✓")
        print("=" * 60)
        print()
        print("Next steps:")
        print("1. Open http://localhost:8000/docs to explore the API")
        print("2. Add holidays and HOLIDAY rules for your club")
        print()

    except requests.exceptions.ConnectionError:
        print("\n❌ ERROR: Could not connect to the API")
        print("   Make sure the server is running:")
        print("   uvicorn app.main:app --reload")
        print()
    except AssertionError as e:
        print(f"\n❌ TEST FAILED: {e}")
        print()
    except Exception as e:
        print(f"\n❌ ERROR: {e}")
        print()

if __name__ == "__main__":
    main()
