def test_health_reports_storage(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"success": True, "status": "healthy", "storage": "memory"}


def test_unknown_route_is_404(client):
    response = client.get("/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Not Found"}
