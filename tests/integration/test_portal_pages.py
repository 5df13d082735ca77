"""Integration tests for the portal pages against an in-process GraphQL stub."""

import pytest
from fastapi.testclient import TestClient

from manager_portal.assets.store import AssetStore
from manager_portal.auth.session import create_session_token
from manager_portal.core.exceptions import UploadError
from manager_portal.web.app import create_app
from tests.factories import businesses_with, review_payload

pytestmark = pytest.mark.integration


class MemoryAssetStore(AssetStore):
    """Keeps uploads in memory and hands out sequential ids."""

    def __init__(self, fail: bool = False):
        self.stored: list[tuple[str, str]] = []
        self.fail = fail

    async def store(self, owner_id, upload):
        if self.fail:
            raise UploadError("disk full")
        self.stored.append((owner_id, upload.filename))
        return f"img-{len(self.stored)}"


@pytest.fixture
def asset_store():
    return MemoryAssetStore()


@pytest.fixture
def app(settings, gateway, asset_store):
    return create_app(settings, gateway=gateway, asset_store=asset_store)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def manager_client(client, settings, manager):
    client.cookies.set(settings.session_cookie_name, create_session_token(manager, settings))
    return client


@pytest.fixture
def review_store(graphql_stub):
    """Three reviews the stub serves and deletes from."""
    reviews = [
        review_payload("r1", "0"),
        review_payload("r2", "2"),
        review_payload("r3", "1"),
    ]

    def delete(variables):
        entity_id = variables["where"]["id"]
        reviews[:] = [r for r in reviews if r["id"] != entity_id]
        return {"data": {"deleteReview": {"id": entity_id}}}

    graphql_stub.on("UserReviews", lambda variables: businesses_with("reviews", list(reviews)))
    graphql_stub.on("DeleteReview", delete)
    return reviews


PROTECTED_PAGES = [
    "/dashboard",
    "/business-profile",
    "/products",
    "/add-product",
    "/edit-product/x",
    "/reviews",
    "/review/x",
    "/complaints",
    "/complaint/x",
    "/job-listings",
    "/account",
]


class TestSessionGuard:
    """Protected pages never render for the wrong visitor."""

    @pytest.mark.parametrize("path", PROTECTED_PAGES)
    def test_unauthenticated_redirected_to_sign_in(self, client, graphql_stub, path):
        response = client.get(path, follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/auth/signin"
        assert graphql_stub.calls == []

    @pytest.mark.parametrize("path", PROTECTED_PAGES)
    def test_customer_redirected_to_unauthorized(
        self, client, graphql_stub, settings, customer, path
    ):
        client.cookies.set(settings.session_cookie_name, create_session_token(customer, settings))

        response = client.get(path, follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/unauthorized"
        assert graphql_stub.calls == []

    def test_api_routes_answer_json(self, client):
        response = client.post("/api/upload", files={"file": ("a.jpg", b"x", "image/jpeg")})

        assert response.status_code == 401
        assert "error" in response.json()

    def test_manager_session_is_renewed(self, manager_client, review_store, settings):
        response = manager_client.get("/reviews")

        assert response.status_code == 200
        assert settings.session_cookie_name in response.headers.get("set-cookie", "")


class TestSignIn:

    def test_manager_sign_in_sets_cookie(self, client, graphql_stub, settings):
        graphql_stub.on(
            "AuthenticateUser",
            {
                "data": {
                    "authenticateUserWithPassword": {
                        "__typename": "UserAuthenticationWithPasswordSuccess",
                        "item": {"id": "user-1", "email": "m@example.com", "name": "M", "role": "manager"},
                    }
                }
            },
        )

        response = client.post(
            "/auth/signin",
            data={"email": "m@example.com", "password": "pw"},
            follow_redirects=False,
        )

        assert response.status_code == 303
        assert response.headers["location"] == "/dashboard"
        assert "httponly" in response.headers["set-cookie"].lower()

    def test_customer_sign_in_rejected(self, client, graphql_stub):
        graphql_stub.on(
            "AuthenticateUser",
            {
                "data": {
                    "authenticateUserWithPassword": {
                        "__typename": "UserAuthenticationWithPasswordSuccess",
                        "item": {"id": "user-2", "email": "c@example.com", "name": "C", "role": "customer"},
                    }
                }
            },
        )

        response = client.post("/auth/signin", data={"email": "c@example.com", "password": "pw"})

        assert response.status_code == 401
        assert "only managers" in response.text
        assert "set-cookie" not in response.headers

    def test_sign_out_clears_cookie(self, manager_client, settings):
        response = manager_client.post("/auth/signout", follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"].startswith("/auth/signin")
        assert f'{settings.session_cookie_name}=""' in response.headers["set-cookie"]


class TestReviewsPage:
    """Review list, status labels and mass delete."""

    def test_labels_follow_fetch_order(self, manager_client, review_store):
        response = manager_client.get("/reviews")

        text = response.text
        assert text.index("Approved") < text.index("Pending Approval") < text.index("Denied")

    def test_unconfirmed_delete_shows_confirmation(self, manager_client, review_store, graphql_stub):
        graphql_stub.reset_calls()

        response = manager_client.post("/reviews/delete", data={"ids": ["r2"]})

        assert response.status_code == 200
        assert "Confirm delete" in response.text
        assert graphql_stub.calls == []

    def test_confirmed_delete_runs_once_then_refetches(self, manager_client, review_store, graphql_stub):
        response = manager_client.post("/reviews/delete", data={"ids": ["r2"], "confirmed": "yes"})

        assert graphql_stub.operations == ["DeleteReview", "UserReviews"]
        assert graphql_stub.calls[0].variables == {"where": {"id": "r2"}}
        assert "1 reviews have been deleted." in response.text
        assert "Review r1" in response.text
        assert "Review r3" in response.text
        assert "Review r2" not in response.text

    def test_empty_selection_makes_no_delete(self, manager_client, review_store, graphql_stub):
        response = manager_client.post("/reviews/delete", data={"confirmed": "yes"})

        assert "No reviews selected." in response.text
        assert "DeleteReview" not in graphql_stub.operations

    def test_status_change_refetches_review(self, manager_client, graphql_stub):
        graphql_stub.on("UpdateReview", {"data": {"updateReview": {"id": "r2", "moderationStatus": "0"}}})
        graphql_stub.on("Review", {"data": {"review": review_payload("r2", "0")}})

        response = manager_client.post("/review/r2/status", data={"moderationStatus": "0"})

        assert response.status_code == 200
        assert graphql_stub.operations == ["UpdateReview", "Review"]
        assert "Review marked Approved." in response.text

    def test_invalid_status_shows_error_without_update(self, manager_client, graphql_stub):
        graphql_stub.on("Review", {"data": {"review": review_payload("r2", "2")}})

        response = manager_client.post("/review/r2/status", data={"moderationStatus": "9"})

        assert "UpdateReview" not in graphql_stub.operations
        assert "moderationStatus must be one of" in response.text


class TestProductPages:

    def test_edit_redirects_with_toast(self, manager_client, graphql_stub, sample_product):
        graphql_stub.on("Product", {"data": {"product": sample_product}})
        graphql_stub.on("UpdateProduct", {"data": {"updateProduct": {"id": "prod-1"}}})

        response = manager_client.post(
            "/edit-product/prod-1",
            data={"name": "Country Loaf", "description": "Naturally leavened", "businessId": "biz-1"},
            follow_redirects=False,
        )

        assert response.status_code == 303
        assert response.headers["location"] == "/products?toast=product_updated"
        assert graphql_stub.calls_to("UpdateProduct")[0].variables == {
            "id": "prod-1",
            "data": {"name": "Country Loaf"},
        }

    def test_upload_before_product_exists(self, manager_client, graphql_stub, asset_store):
        graphql_stub.on("UserBusinessNames", businesses_with("products", []))
        graphql_stub.reset_calls()

        response = manager_client.post(
            "/add-product/images",
            data={"productId": ""},
            files={"file": ("loaf.jpg", b"jpeg", "image/jpeg")},
        )

        assert 'class="toast error"' in response.text
        assert "Save the product before uploading images." in response.text
        assert asset_store.stored == []
        assert "LinkProductImage" not in graphql_stub.operations


class TestUploadEndpoint:

    def test_upload_returns_asset_id(self, manager_client, asset_store):
        response = manager_client.post(
            "/api/upload",
            data={"productId": "prod-1"},
            files={"file": ("loaf.jpg", b"jpeg", "image/jpeg")},
        )

        assert response.status_code == 200
        assert response.json() == {"id": "img-1", "data": {"id": "img-1"}}
        assert asset_store.stored == [("prod-1", "loaf.jpg")]

    def test_missing_file_is_bad_request(self, manager_client):
        response = manager_client.post("/api/upload", data={"productId": "prod-1"})

        assert response.status_code == 400
        assert response.json() == {"error": "No file uploaded"}

    def test_store_failure_is_server_error(self, manager_client, asset_store):
        asset_store.fail = True

        response = manager_client.post(
            "/api/upload",
            data={"productId": "prod-1"},
            files={"file": ("loaf.jpg", b"jpeg", "image/jpeg")},
        )

        assert response.status_code == 500
        assert "error" in response.json()


class TestHealth:

    def test_health_reports_graphql(self, client, graphql_stub):
        graphql_stub.on("Ping", {"data": {"__typename": "Query"}})

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["services"]["graphql"]["status"] == "healthy"
