from intake_api.services.masking import mask_amount, mask_email

JANE = {
    "name": "Jane Doe",
    "debtCategory": "unsecured",
    "debtTypes": ["Credit Cards"],
    "totalDebtAmount": "5000",
}


def _create(client, payload):
    response = client.post("/api/leads", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert "X-Request-ID" in response.headers


def test_create_lead_derives_source_and_defaults(client):
    lead = _create(client, JANE)

    assert lead["source"] == "Credit Card Debt"
    assert lead["totalDebtAmount"] == 5000.0
    assert lead["status"] == "new"
    assert lead["email"] is None
    assert lead["convertedAt"] is None
    assert mask_email(lead["email"]) == "—"
    assert mask_amount(lead["totalDebtAmount"]) == "$5***"


def test_client_supplied_source_is_ignored(client):
    lead = _create(client, {"name": "Sam", "debtCategory": "secured", "source": "Payday Loans"})
    assert lead["source"] == "Secured Debt"
    assert lead["debtTypes"] == []


def test_unparseable_numbers_are_dropped(client):
    lead = _create(client, {"name": "Sam", "totalDebtAmount": "lots", "numberOfCreditors": "", "monthlyDebtPayment": -5})
    assert lead["totalDebtAmount"] is None
    assert lead["numberOfCreditors"] is None
    assert lead["monthlyDebtPayment"] is None


def test_create_requires_name(client):
    response = client.post("/api/leads", json={"name": "   ", "email": "a@b.com"})
    assert response.status_code == 422
    assert response.json()["code"] == "validation_error"


def test_create_rejects_debt_types_outside_category(client):
    response = client.post(
        "/api/leads",
        json={"name": "Sam", "debtCategory": "secured", "debtTypes": ["Credit Cards"]},
    )
    assert response.status_code == 422


def test_get_missing_lead_returns_404(client):
    response = client.get("/api/leads/9999")
    assert response.status_code == 404
    assert response.json()["code"] == "lead_not_found"


def test_list_paginates_newest_first(client):
    ids = [_create(client, {"name": f"Lead {i}"})["id"] for i in range(3)]

    first = client.get("/api/leads", params={"page": 1, "limit": 2}).json()
    second = client.get("/api/leads", params={"page": 2, "limit": 2}).json()

    assert first["total"] == 3
    assert first["pages"] == 2
    assert [item["id"] for item in first["items"]] == [ids[2], ids[1]]
    assert [item["id"] for item in second["items"]] == [ids[0]]


def test_list_empty(client):
    body = client.get("/api/leads").json()
    assert body["items"] == []
    assert body["total"] == 0


def test_list_filters(client, full_lead):
    hot = _create(client, full_lead)
    cold = _create(client, {"name": "Bob Cold", "phone": "5125550000"})
    client.put(f"/api/leads/{cold['id']}/status", json={"status": "interested"})

    by_tier = client.get("/api/leads", params={"category": "hot"}).json()
    assert [item["id"] for item in by_tier["items"]] == [hot["id"]]
    assert by_tier["total"] == 1

    by_status = client.get("/api/leads", params={"status": "interested"}).json()
    assert [item["id"] for item in by_status["items"]] == [cold["id"]]

    by_search = client.get("/api/leads", params={"search": "maria"}).json()
    assert [item["id"] for item in by_search["items"]] == [hot["id"]]


def test_patch_category_change_clears_debt_types(client):
    lead = _create(client, JANE)

    response = client.patch(f"/api/leads/{lead['id']}", json={"debtCategory": "secured"})
    assert response.status_code == 200
    updated = response.json()
    assert updated["debtTypes"] == []
    assert updated["source"] == "Secured Debt"

    response = client.patch(f"/api/leads/{lead['id']}", json={"debtTypes": ["Title Loans"]})
    assert response.json()["source"] == "Secured Debt"


def test_patch_rejects_mismatched_debt_types(client):
    lead = _create(client, JANE)
    response = client.patch(f"/api/leads/{lead['id']}", json={"debtTypes": ["Auto Loans"]})
    assert response.status_code == 422
    assert response.json()["code"] == "invalid_debt_types"


def test_patch_only_touches_given_fields(client):
    lead = _create(client, dict(JANE, city="Austin"))
    updated = client.patch(f"/api/leads/{lead['id']}", json={"email": "jane@example.com"}).json()
    assert updated["email"] == "jane@example.com"
    assert updated["city"] == "Austin"
    assert updated["source"] == "Credit Card Debt"


def test_status_change_records_conversion_once(client):
    lead = _create(client, JANE)

    converted = client.put(f"/api/leads/{lead['id']}/status", json={"status": "successful"}).json()
    assert converted["status"] == "successful"
    assert converted["convertedAt"] is not None

    client.put(f"/api/leads/{lead['id']}/status", json={"status": "follow-up", "followUpNotes": "call Monday"})
    again = client.put(f"/api/leads/{lead['id']}/status", json={"status": "successful"}).json()
    assert again["convertedAt"] == converted["convertedAt"]
    assert again["followUpNotes"] == "call Monday"


def test_status_must_be_known(client):
    lead = _create(client, JANE)
    response = client.put(f"/api/leads/{lead['id']}/status", json={"status": "archived"})
    assert response.status_code == 422


def test_stats(client, full_lead):
    hot = _create(client, full_lead)
    _create(client, JANE)
    client.put(f"/api/leads/{hot['id']}/status", json={"status": "successful"})

    stats = client.get("/api/leads/stats").json()

    assert stats["totalLeads"] == 2
    assert stats["byCategory"] == {"hot": 1, "warm": 0, "cold": 1}
    assert stats["byStatus"]["successful"] == 1
    assert stats["conversionRate"] == 50.0


def test_patch_ignores_unparseable_numbers(client):
    lead = _create(client, dict(JANE, numberOfCreditors=3))

    response = client.patch(
        f"/api/leads/{lead['id']}",
        json={"totalDebtAmount": "lots", "numberOfCreditors": "2.5", "city": "Austin"},
    )

    assert response.status_code == 200
    updated = response.json()
    assert updated["totalDebtAmount"] == 5000.0
    assert updated["numberOfCreditors"] == 3
    assert updated["city"] == "Austin"


def test_patch_null_clears_number(client):
    lead = _create(client, JANE)
    updated = client.patch(f"/api/leads/{lead['id']}", json={"totalDebtAmount": None}).json()
    assert updated["totalDebtAmount"] is None


def test_amounts_beyond_column_precision_are_omitted(client):
    lead = _create(client, {"name": "Big Spender", "totalDebtAmount": "100000000000", "monthlyDebtPayment": 250})
    assert lead["totalDebtAmount"] is None
    assert lead["monthlyDebtPayment"] == 250.0

    updated = client.patch(f"/api/leads/{lead['id']}", json={"monthlyDebtPayment": 1e12}).json()
    assert updated["monthlyDebtPayment"] == 250.0


def test_search_treats_wildcards_literally(client):
    _create(client, {"name": "Plain Name"})
    underscored = _create(client, {"name": "Under_score"})

    body = client.get("/api/leads", params={"search": "_"}).json()
    assert [item["id"] for item in body["items"]] == [underscored["id"]]

    assert client.get("/api/leads", params={"search": "%"}).json()["total"] == 0
