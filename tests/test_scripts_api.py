"""
API tests for script upload and ownership listing.

Covers PUT /script/{name} and GET /script through the full application with
the fake dispatch namespace behind the namespace client.
"""

import pytest
from sqlalchemy import select, text

from gateway.db.models import DispatchLimits
from gateway.infrastructure.database.session import get_engine

from tests.conftest import bearer

HELLO = 'export default { fetch() { return new Response("hello"); } };'


def upload_body(script=HELLO, **dispatch_config):
    return {"script": script, "dispatch_config": dispatch_config}


async def stored_limits(db_session, name):
    result = await db_session.execute(select(DispatchLimits).where(DispatchLimits.script_id == name))
    return result.scalar_one_or_none()


class TestUpload:
    async def test_new_name_is_claimed_by_uploader(self, client, fake_namespace):
        response = await client.put("/script/hello", json=upload_body(), headers=bearer("a-token"))

        assert response.status_code == 201
        assert response.json() == {"message": "Success"}
        assert fake_namespace.scripts["hello"] == HELLO
        assert fake_namespace.tags["hello"] == ["A", "free"]

    async def test_name_owned_by_another_customer_is_rejected(self, client, fake_namespace):
        await client.put("/script/hello", json=upload_body(), headers=bearer("a-token"))

        response = await client.put(
            "/script/hello",
            json=upload_body(script="export default {};"),
            headers=bearer("b-token"),
        )

        assert response.status_code == 409
        assert response.json()["detail"] == "Script name already reserved"
        assert fake_namespace.scripts["hello"] == HELLO
        assert fake_namespace.tags["hello"] == ["A", "free"]

    async def test_owner_can_replace_script(self, client, fake_namespace):
        await client.put("/script/hello", json=upload_body(), headers=bearer("a-token"))

        replacement = 'export default { fetch() { return new Response("v2"); } };'
        response = await client.put("/script/hello", json=upload_body(script=replacement), headers=bearer("a-token"))

        assert response.status_code == 201
        assert fake_namespace.scripts["hello"] == replacement
        assert fake_namespace.tags["hello"] == ["A", "free"]

    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"dispatch_config": {"limits": {"cpuMs": 10}}},
            {"scripts": HELLO},
            {"script": None},
        ],
    )
    async def test_body_without_script_is_rejected(self, client, fake_namespace, body):
        response = await client.put("/script/hello", json=body, headers=bearer("a-token"))

        assert response.status_code == 400
        assert "Expected json" in response.json()["detail"]
        assert "hello" not in fake_namespace.scripts

    async def test_malformed_json_is_rejected(self, client):
        response = await client.put(
            "/script/hello",
            content=b"{not json",
            headers={**bearer("a-token"), "Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert "dispatch_config" in response.json()["detail"]

    async def test_invalid_script_name_is_rejected(self, client, fake_namespace):
        response = await client.put("/script/bad.name", json=upload_body(), headers=bearer("a-token"))

        assert response.status_code == 400
        assert fake_namespace.api_requests() == []

    async def test_platform_rejection_is_forwarded(self, client, fake_namespace):
        response = await client.put(
            "/script/broken",
            json=upload_body(script="syntax error here"),
            headers=bearer("a-token"),
        )

        assert response.status_code == 400
        payload = response.json()
        assert payload["success"] is False
        assert payload["errors"][0]["message"] == "Uncaught SyntaxError: Unexpected identifier"
        assert "broken" not in fake_namespace.tags

    async def test_platform_rejection_does_not_store_limits(self, client, db_session):
        await client.put(
            "/script/broken",
            json=upload_body(script="syntax error here", limits={"cpuMs": 50}),
            headers=bearer("a-token"),
        )

        assert await stored_limits(db_session, "broken") is None

    @pytest.mark.parametrize(
        "limits",
        [
            {"cpuMs": 10**20},
            {"memory": 2**31},
            {"cpuMs": 1e20},
            {"cpuMs": True},
            {"memory": "128"},
        ],
    )
    async def test_out_of_range_limits_are_rejected_before_upload(self, client, fake_namespace, db_session, limits):
        response = await client.put("/script/big", json=upload_body(limits=limits), headers=bearer("a-token"))

        assert response.status_code == 400
        assert "Expected json" in response.json()["detail"]
        assert fake_namespace.api_requests("PUT") == []
        assert await stored_limits(db_session, "big") is None

    async def test_largest_limit_is_stored(self, client, db_session):
        response = await client.put(
            "/script/big",
            json=upload_body(limits={"cpuMs": 2**31 - 1}),
            headers=bearer("a-token"),
        )

        assert response.status_code == 201
        assert (await stored_limits(db_session, "big")).cpu_ms == 2**31 - 1

    async def test_tagging_failure_keeps_script_live(self, client, fake_namespace):
        fake_namespace.tagging_broken = True

        response = await client.put("/script/hello", json=upload_body(), headers=bearer("a-token"))

        assert response.status_code == 201
        assert "hello" in fake_namespace.scripts
        assert fake_namespace.tags.get("hello") is None

        dispatched = await client.get("/dispatch/hello")
        assert dispatched.status_code == 200

    async def test_tag_lookup_failure_returns_500(self, client, fake_namespace):
        fake_namespace.api_down = True

        response = await client.put("/script/hello", json=upload_body(), headers=bearer("a-token"))

        assert response.status_code == 500
        assert response.json()["detail"] == "Could not complete request"
        assert "hello" not in fake_namespace.scripts

    async def test_requires_authentication(self, client, fake_namespace):
        response = await client.put("/script/hello", json=upload_body())

        assert response.status_code == 401
        assert fake_namespace.api_requests() == []

    async def test_unknown_token_is_rejected(self, client, fake_namespace):
        response = await client.put("/script/hello", json=upload_body(), headers=bearer("nope"))

        assert response.status_code == 401
        assert fake_namespace.api_requests() == []


class TestDispatchLimitsPersistence:
    async def test_cpu_limit_is_stored(self, client, db_session):
        response = await client.put(
            "/script/limited",
            json=upload_body(limits={"cpuMs": 50}),
            headers=bearer("a-token"),
        )

        assert response.status_code == 201
        row = await stored_limits(db_session, "limited")
        assert row is not None
        assert row.cpu_ms == 50
        assert row.memory is None

    async def test_both_limits_are_stored(self, client, db_session):
        await client.put(
            "/script/limited",
            json=upload_body(limits={"cpuMs": 25, "memory": 128}),
            headers=bearer("a-token"),
        )

        row = await stored_limits(db_session, "limited")
        assert (row.cpu_ms, row.memory) == (25, 128)

    @pytest.mark.parametrize("dispatch_config", [{}, {"limits": {}}, {"limits": {"cpuMs": 0, "memory": 0}}])
    async def test_no_row_without_limits(self, client, db_session, dispatch_config):
        response = await client.put(
            "/script/unlimited",
            json={"script": HELLO, "dispatch_config": dispatch_config},
            headers=bearer("a-token"),
        )

        assert response.status_code == 201
        assert await stored_limits(db_session, "unlimited") is None

    async def test_reupload_replaces_limits(self, client, db_session):
        await client.put("/script/limited", json=upload_body(limits={"cpuMs": 50}), headers=bearer("a-token"))
        await client.put("/script/limited", json=upload_body(limits={"memory": 64}), headers=bearer("a-token"))

        row = await stored_limits(db_session, "limited")
        assert (row.cpu_ms, row.memory) == (None, 64)


class TestListScripts:
    async def test_lists_only_owned_scripts(self, client):
        for name in ("one", "two"):
            await client.put(f"/script/{name}", json=upload_body(), headers=bearer("a-token"))
        await client.put("/script/three", json=upload_body(), headers=bearer("b-token"))

        response = await client.get("/script", headers=bearer("a-token"))

        assert response.status_code == 200
        assert sorted(response.json()) == ["one", "two"]

    async def test_customer_without_uploads_gets_empty_list(self, client):
        await client.put("/script/one", json=upload_body(), headers=bearer("a-token"))

        response = await client.get("/script", headers=bearer("c-token"))

        assert response.status_code == 200
        assert response.json() == []

    async def test_requires_authentication(self, client):
        response = await client.get("/script")

        assert response.status_code == 401

    async def test_namespace_failure_returns_500(self, client, fake_namespace):
        fake_namespace.api_down = True

        response = await client.get("/script", headers=bearer("a-token"))

        assert response.status_code == 500


class TestAuthenticationStoreFailure:
    async def test_store_failure_is_not_reported_as_unauthorized(self, client):
        async with get_engine().begin() as conn:
            await conn.execute(text("DROP TABLE customer_tokens"))

        response = await client.get("/script", headers=bearer("a-token"))

        assert response.status_code == 500
        assert response.json()["detail"] == "Could not complete request"
