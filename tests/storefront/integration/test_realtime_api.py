"""Integration tests for the order status WebSocket."""

CUSTOMER = {"X-User-Id": "user-001"}


def _place(client, product_id, headers=CUSTOMER):
    response = client.post(
        "/orders",
        json={"product_id": product_id, "quantity": 1, "address": "1 Main St"},
        headers=headers,
    )
    return response.json()["order_id"]


def _subscribe(ws, order_id, user_id="user-001"):
    ws.send_json({"event": "subscribeToOrder", "orderId": order_id, "userId": user_id})
    return ws.receive_json()


class TestOrderUpdatesWebSocket:
    def test_subscribe_is_acknowledged(self, client, product_id):
        order_id = _place(client, product_id)
        with client.websocket_connect("/ws/orders") as ws:
            ack = _subscribe(ws, order_id)
        assert ack == {"event": "subscribed", "data": {"orderId": order_id, "userId": "user-001"}}

    def test_status_update_is_pushed(self, client, product_id):
        order_id = _place(client, product_id)
        with client.websocket_connect("/ws/orders") as ws:
            _subscribe(ws, order_id)
            client.put("/orders/status", json={"order_id": order_id, "status": "Dispatch"}, headers=CUSTOMER)
            message = ws.receive_json()
        assert message == {"event": "orderStatusUpdated", "data": {"orderId": order_id, "status": "Dispatch"}}

    def test_updates_for_other_orders_of_same_user_are_pushed(self, client, product_id):
        order_a = _place(client, product_id)
        order_b = _place(client, product_id)
        with client.websocket_connect("/ws/orders") as ws:
            _subscribe(ws, order_a)
            client.put("/orders/status", json={"order_id": order_b, "status": "UnderPackaging"}, headers=CUSTOMER)
            message = ws.receive_json()
        assert message["data"] == {"orderId": order_b, "status": "UnderPackaging"}

    def test_unsupported_message_gets_error(self, client):
        with client.websocket_connect("/ws/orders") as ws:
            ws.send_json({"event": "hello"})
            reply = ws.receive_json()
        assert reply["event"] == "error"

    def test_subscription_requires_ids(self, client):
        with client.websocket_connect("/ws/orders") as ws:
            ws.send_json({"event": "subscribeToOrder", "orderId": "ord-1"})
            reply = ws.receive_json()
        assert reply == {"event": "error", "data": {"message": "orderId and userId are required"}}

    def test_disconnect_leaves_groups(self, client, product_id, fanout):
        order_id = _place(client, product_id)
        with client.websocket_connect("/ws/orders") as ws:
            _subscribe(ws, order_id)
            assert len(fanout.registry.members("user-001")) == 1
        response = client.put(
            "/orders/status",
            json={"order_id": order_id, "status": "Dispatch"},
            headers=CUSTOMER,
        )
        assert response.status_code == 200
