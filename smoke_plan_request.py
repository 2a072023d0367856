import requests
import json

BASE_URL = "http://127.0.0.1:8000"

# --- test payload ---
payload = {
    "city": "Ho Chi Minh City",
    "timeSlot": "morning",
    "vibes": ["Chill"],
    "interests": ["Coffee"],
    "budget": "Medium",
    "groupSize": "Couple"
}

def run_smoke():
    url = f"{BASE_URL}/api/plan"
    headers = {"Content-Type": "application/json"}

    print(f"➡️ Sending POST {url}")
    print(json.dumps(payload, indent=2))

    resp = requests.post(url, headers=headers, json=payload, timeout=30)

    print(f"\n⬅️ Status: {resp.status_code}")
    try:
        data = resp.json()
        print(json.dumps(data, indent=2, ensure_ascii=False))
    except ValueError:
        print(resp.text)

if __name__ == "__main__":
    run_smoke()
