"""End-to-end checks of the assembled application."""


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "domain": "fable"}


class TestShoppingJourney:
    def test_register_address_cart_checkout(self, client, make_product):
        product_id = make_product(price=500.0)

        registered = client.post("/customers", json={"name": "Asha Rao", "phone": "+91-98450-00001"})
        assert registered.status_code == 201

        # Registration sets the session cookie, which the client keeps
        address = client.post(
            "/profile/addresses",
            json={
                "name": "Asha Rao",
                "line1": "12 MG Road",
                "city": "Bengaluru",
                "state": "Karnataka",
                "zipCode": "560001",
            },
        )
        address_id = address.json()["addressId"]

        client.post("/cart", json={"productId": product_id, "size": "M", "quantity": 2})
        placed = client.post("/orders", json={"addressId": address_id})
        assert placed.status_code == 201

        orders = client.get("/orders").json()
        assert len(orders) == 1
        assert orders[0]["totalAmount"] == 1000.0
        assert orders[0]["status"] == "Pending"
        assert client.get("/cart").json() == {"items": [], "subtotal": 0.0}

    def test_malformed_body_is_400(self, client, make_customer, auth_headers):
        headers = {**auth_headers(make_customer()), "Content-Type": "application/json"}
        response = client.post("/cart", content=b"{not json", headers=headers)
        assert response.status_code == 400
