"""Integration tests for dashboard, business profile, complaints, jobs and account pages."""

import pytest
from fastapi.testclient import TestClient

from manager_portal.auth.session import create_session_token
from manager_portal.web.app import create_app
from tests.factories import businesses_with, complaint_payload

pytestmark = pytest.mark.integration


@pytest.fixture
def manager_client(settings, gateway, manager):
    client = TestClient(create_app(settings, gateway=gateway))
    client.cookies.set(settings.session_cookie_name, create_session_token(manager, settings))
    return client


class TestDashboard:

    def test_shows_counts(self, manager_client, graphql_stub):
        graphql_stub.on(
            "DashboardSummary",
            {"data": {"user": {"businesses": [{"id": "biz-1", "products": [], "jobListings": [],
                                               "reviews": [], "complaints": [complaint_payload("c1", "1")]}]}}},
        )

        response = manager_client.get("/dashboard")

        assert response.status_code == 200
        assert "(1 unresolved)" in response.text

    def test_backend_failure_still_renders(self, manager_client, graphql_stub):
        graphql_stub.on("DashboardSummary", {"errors": [{"message": "timeout"}]})

        response = manager_client.get("/dashboard")

        assert response.status_code == 200
        assert 'class="toast error"' in response.text


class TestBusinessProfile:

    def test_panel_sends_changed_field_only(self, manager_client, graphql_stub, sample_business):
        graphql_stub.on("UserBusinesses", {"data": {"user": {"businesses": [sample_business]}}})
        graphql_stub.on("UpdateBusiness", {"data": {"updateBusiness": {"id": "biz-1"}}})

        response = manager_client.post(
            "/business-profile/contact",
            data={
                "contactEmail": sample_business["contactEmail"],
                "contactPhone": "555-0199",
                "website": sample_business["website"],
                "location": sample_business["location"],
                "address": sample_business["address"],
            },
        )

        assert response.status_code == 200
        assert "Contact Information updated." in response.text
        assert graphql_stub.calls_to("UpdateBusiness")[0].variables == {
            "where": {"id": "biz-1"},
            "data": {"contactPhone": "555-0199"},
        }

    def test_unknown_panel(self, manager_client, graphql_stub):
        response = manager_client.post("/business-profile/billing", data={})

        assert response.status_code == 404
        assert graphql_stub.calls == []


class TestComplaints:

    def test_toggle_then_refetch(self, manager_client, graphql_stub):
        graphql_stub.on("UpdateComplaint", {"data": {"updateComplaint": {"id": "c1", "status": "0"}}})
        graphql_stub.on("Complaint", {"data": {"complaint": complaint_payload("c1", "0")}})

        response = manager_client.post("/complaint/c1/toggle", data={"current": "1"})

        assert graphql_stub.operations == ["UpdateComplaint", "Complaint"]
        assert graphql_stub.calls[0].variables["data"] == {"status": "0"}
        assert "Complaint marked Closed." in response.text

    def test_mass_delete_partial_failure(self, manager_client, graphql_stub):
        complaints = [complaint_payload("c1", "1"), complaint_payload("c2", "1")]

        def delete(variables):
            if variables["where"]["id"] == "c2":
                return {"errors": [{"message": "locked"}]}
            complaints[:] = [c for c in complaints if c["id"] != variables["where"]["id"]]
            return {"data": {"deleteComplaint": {"id": variables["where"]["id"]}}}

        graphql_stub.on("UserComplaints", lambda variables: businesses_with("complaints", list(complaints)))
        graphql_stub.on("DeleteComplaint", delete)

        response = manager_client.post(
            "/complaints/delete",
            data={"ids": ["c1", "c2"], "confirmed": "yes"},
        )

        assert graphql_stub.operations == ["DeleteComplaint", "DeleteComplaint", "UserComplaints"]
        assert "1 complaints deleted, 1 could not be deleted." in response.text


class TestJobListings:

    def test_invalid_salary_keeps_form_open(self, manager_client, graphql_stub, sample_job):
        graphql_stub.on("UserJobListings", businesses_with("jobListings", [sample_job]))

        response = manager_client.post("/job-listings/job-1", data={"salary": "lots"})

        assert "salary must be a number" in response.text
        assert 'action="/job-listings/job-1"' in response.text
        assert "UpdateJobListing" not in graphql_stub.operations

    def test_select_all_deletes_every_listing(self, manager_client, graphql_stub, sample_job):
        graphql_stub.on("UserJobListings", businesses_with("jobListings", [sample_job]))
        graphql_stub.on("DeleteJobListing", {"data": {"deleteJobListing": {"id": "job-1"}}})

        manager_client.post("/job-listings/delete", data={"select_all": "on", "confirmed": "yes"})

        assert graphql_stub.calls_to("DeleteJobListing")[0].variables == {"where": {"id": "job-1"}}


class TestAccount:

    def test_password_change_requires_both_fields(self, manager_client, graphql_stub):
        graphql_stub.on("UserAccount", {"data": {"user": {"id": "user-1", "name": "M", "email": "m@example.com"}}})

        response = manager_client.post("/account/password", data={"currentPassword": "old"})

        assert "Both current and new password are required." in response.text
        assert "UpdateUserPassword" not in graphql_stub.operations
