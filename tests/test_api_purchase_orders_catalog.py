def test_list_purchase_orders_with_search(client):
    response = client.get("/api/v1/purchase-orders", params={"search": "sam"})
    assert response.status_code == 200
    assert [p["ref"] for p in response.json()] == ["PO-1002"]


def test_get_purchase_order(client):
    response = client.get("/api/v1/purchase-orders/1")
    assert response.status_code == 200
    body = response.json()
    assert body["contact"] == "Dana Reid"
    assert float(body["cost"]) == 120.5


def test_create_and_delete_purchase_order(client, data_service):
    response = client.post(
        "/api/v1/purchase-orders",
        json={"job_id": 1, "by_id": 1, "project_id": 3, "cost": "45.00", "ref": "PO-2000", "contact": "Lee"},
    )
    assert response.status_code == 201
    code = response.json()["code"]
    assert code == 3

    assert client.delete(f"/api/v1/purchase-orders/{code}").status_code == 200
    assert client.get(f"/api/v1/purchase-orders/{code}").status_code == 404


def test_replace_purchase_order(client):
    response = client.put("/api/v1/purchase-orders/2", json={"ref": "PO-1002-B", "contact": "Sam Hill"})
    assert response.status_code == 200
    assert response.json()["ref"] == "PO-1002-B"


def test_categories(client):
    response = client.get("/api/v1/categories")
    assert [c["name"] for c in response.json()] == ["Electrician", "Plumber"]

    created = client.post("/api/v1/categories", json={"name": "Painter"})
    assert created.status_code == 201
    assert client.get(f"/api/v1/categories/{created.json()['code']}").json()["name"] == "Painter"


def test_project_details(client):
    assert client.get("/api/v1/projects/1").json()["project_name"] == "Project1"
    assert client.get("/api/v1/projects/42").status_code == 404


def test_contractor_details(client):
    assert client.get("/api/v1/contractors/1").json()["company_name"] == "Sparks & Co"
    assert client.get("/api/v1/contractors/2").status_code == 404

    created = client.post("/api/v1/contractors", json={"company_name": "Pipe Pros", "email": "hi@pipe.example"})
    assert created.status_code == 201
    assert created.json()["code"] == 2


def test_detail_lookup_failure_is_502(client, data_service):
    data_service.fail("select", "project")
    response = client.get("/api/v1/projects/1")
    assert response.status_code == 502


def test_websocket_info(client):
    body = client.get("/api/v1/websocket-info").json()
    endpoint = body["endpoints"][0]
    assert endpoint["path"] == "/ws/editors/{entity}"
    assert endpoint["entities"] == ["jobs", "purchases"]
    assert "submit" in endpoint["messages"]["client_to_server"]
