def test_demo_scenario(client):
    """Agent and client log in, client files a ticket, agent closes it, both see it closed."""

    # 1) Both demo accounts log in
    r = client.post("/login", json={"email": "agent@demo.com", "password": "password123"})
    assert r.status_code == 200
    agent_headers = {"Authorization": r.json()["token"]}

    r = client.post("/login", json={"email": "client@demo.com", "password": "password123"})
    assert r.status_code == 200
    client_headers = {"Authorization": r.json()["token"]}

    # 2) Client creates the first ticket
    r = client.post("/tickets", json={"subject": "X", "description": "Y"}, headers=client_headers)
    assert r.status_code == 201
    ticket = r.json()
    assert ticket["id"] == 1
    assert ticket["status"] == "open"

    # 3) Both sides talk on the thread
    assert client.post("/tickets/1/messages", json={"message": "Any update?"}, headers=client_headers).status_code == 201
    assert client.post("/tickets/1/messages", json={"message": "Fixed now"}, headers=agent_headers).status_code == 201

    # 4) Agent closes it
    r = client.post("/tickets/1/close", headers=agent_headers)
    assert r.status_code == 200

    # 5) Either token now sees it closed by the agent
    for headers in (agent_headers, client_headers):
        t = client.get("/tickets/1", headers=headers).json()
        assert t["status"] == "closed"
        assert t["closed_by"] == "agent@demo.com"

    thread = client.get("/tickets/1/messages", headers=client_headers).json()
    assert [(m["sender_email"], m["message"]) for m in thread] == [
        ("client@demo.com", "Any update?"),
        ("agent@demo.com", "Fixed now"),
    ]
