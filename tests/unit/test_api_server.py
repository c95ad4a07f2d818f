from fastapi.testclient import TestClient

import api_server


def test_health_and_routes_mounted():
    client = TestClient(api_server.app)
    assert client.get("/health").json() == {"status": "ok"}
    paths = {route.path for route in api_server.app.routes}
    assert "/api/ai-interview/start" in paths
    assert "/api/ai/review" in paths
