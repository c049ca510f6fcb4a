"""Integration tests for registration, profile and admin login endpoints."""

from protean import current_domain

from fable.identity.customer import Customer
from fable.identity.session import ADMIN_ROLE, verify_token


def _address_body(**overrides):
    body = {
        "name": "Asha Rao",
        "line1": "12 MG Road",
        "city": "Bengaluru",
        "state": "Karnataka",
        "zipCode": "560001",
    }
    body.update(overrides)
    return body


class TestRegistration:
    def test_register_returns_id_and_token(self, client):
        response = client.post("/customers", json={"name": "Asha Rao", "phone": "+91-98450-00001"})
        assert response.status_code == 201

        data = response.json()
        assert verify_token(data["token"]).subject == data["customerId"]
        assert response.cookies.get("token") == data["token"]

    def test_duplicate_phone_is_400(self, client):
        client.post("/customers", json={"name": "Asha Rao", "phone": "+91-98450-00001"})
        response = client.post("/customers", json={"name": "Someone Else", "phone": "+91-98450-00001"})
        assert response.status_code == 400

    def test_cookie_authenticates_later_requests(self, client):
        client.post("/customers", json={"name": "Asha Rao", "phone": "+91-98450-00001"})
        profile = client.get("/profile")
        assert profile.status_code == 200
        assert profile.json()["name"] == "Asha Rao"


class TestAddressBookEndpoints:
    def test_add_and_list_addresses(self, client, make_customer, auth_headers):
        customer_id = make_customer()
        headers = auth_headers(customer_id)

        response = client.post("/profile/addresses", json=_address_body(line2="Near Metro"), headers=headers)
        assert response.status_code == 201
        address_id = response.json()["addressId"]

        addresses = client.get("/profile/addresses", headers=headers).json()
        assert len(addresses) == 1
        assert addresses[0]["id"] == address_id
        assert addresses[0]["zipCode"] == "560001"
        assert addresses[0]["country"] == "India"

    def test_update_address(self, client, make_customer, make_address, auth_headers):
        customer_id = make_customer()
        address_id = make_address(customer_id)

        response = client.put(
            f"/profile/addresses/{address_id}",
            json={"city": "Mysuru"},
            headers=auth_headers(customer_id),
        )
        assert response.status_code == 200
        customer = current_domain.repository_for(Customer).get(customer_id)
        assert customer.find_address(address_id).city == "Mysuru"

    def test_clear_optional_fields(self, client, make_customer, make_address, auth_headers):
        customer_id = make_customer()
        address_id = make_address(customer_id, line2="Near Metro", phone="+91-98450-11111")

        response = client.put(
            f"/profile/addresses/{address_id}",
            json={"line2": "", "phone": None},
            headers=auth_headers(customer_id),
        )
        assert response.status_code == 200

        address = client.get("/profile/addresses", headers=auth_headers(customer_id)).json()[0]
        assert address["line2"] is None
        assert address["phone"] is None
        assert address["line1"] == "12 MG Road"

    def test_omitted_optional_fields_are_kept(self, client, make_customer, make_address, auth_headers):
        customer_id = make_customer()
        address_id = make_address(customer_id, line2="Near Metro", phone="+91-98450-11111")

        client.put(f"/profile/addresses/{address_id}", json={"city": "Mysuru"}, headers=auth_headers(customer_id))

        address = current_domain.repository_for(Customer).get(customer_id).find_address(address_id)
        assert address.line2 == "Near Metro"
        assert address.phone == "+91-98450-11111"

    def test_remove_unknown_address_is_404(self, client, make_customer, auth_headers):
        customer_id = make_customer()
        response = client.delete("/profile/addresses/missing", headers=auth_headers(customer_id))
        assert response.status_code == 404

    def test_missing_required_field_is_400(self, client, make_customer, auth_headers):
        customer_id = make_customer()
        body = _address_body()
        del body["city"]
        response = client.post("/profile/addresses", json=body, headers=auth_headers(customer_id))
        assert response.status_code == 400

    def test_unauthenticated_is_401(self, client):
        assert client.get("/profile/addresses").status_code == 401

    def test_garbage_token_is_401(self, client):
        response = client.get("/profile/addresses", headers={"Authorization": "Bearer not-a-token"})
        assert response.status_code == 401

    def test_non_ascii_token_is_401(self, client):
        response = client.get("/cart", headers={"Authorization": b"Bearer abc\xe9.def"})
        assert response.status_code == 401


class TestAdminLogin:
    def test_login_issues_admin_token(self, client, monkeypatch):
        monkeypatch.setenv("ADMIN_USERNAME", "store-admin")
        monkeypatch.setenv("ADMIN_PASSWORD", "s3cret")

        response = client.post("/admin/login", json={"username": "store-admin", "password": "s3cret"})
        assert response.status_code == 200
        token = response.json()["token"]
        assert verify_token(token).role == ADMIN_ROLE
        assert response.cookies.get("admin-token") == token

    def test_wrong_password_is_401(self, client, monkeypatch):
        monkeypatch.setenv("ADMIN_USERNAME", "store-admin")
        monkeypatch.setenv("ADMIN_PASSWORD", "s3cret")

        response = client.post("/admin/login", json={"username": "store-admin", "password": "guess"})
        assert response.status_code == 401

    def test_unconfigured_is_500(self, client, monkeypatch):
        monkeypatch.delenv("ADMIN_USERNAME", raising=False)
        monkeypatch.delenv("ADMIN_PASSWORD", raising=False)

        response = client.post("/admin/login", json={"username": "store-admin", "password": "s3cret"})
        assert response.status_code == 500
