"""
Integration tests for /api/v1/matches endpoints.

Covers:
  - GET /api/v1/matches            (classification, dedup, ranking, type filter)
  - GET /api/v1/matches/search     (name, location, category, direction filters)
  - GET /api/v1/matches/{user_id}  (pairwise details, 404)
"""

from __future__ import annotations

import uuid

import pytest
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from tests.conftest import auth_headers_for
from tests.factories import (
    CategoryFactory,
    SkillFactory,
    UserFactory,
    UserSkillFactory,
    VouchFactory,
    at,
)


@pytest_asyncio.fixture
async def skills(db_session: AsyncSession) -> dict:
    music = await CategoryFactory.create_async(db_session, name="Arts")
    languages = await CategoryFactory.create_async(db_session, name="Languages")
    return {
        "guitar": await SkillFactory.create_async(db_session, name="Guitar", category_id=music.id),
        "spanish": await SkillFactory.create_async(db_session, name="Spanish", category_id=languages.id),
        "french": await SkillFactory.create_async(db_session, name="French", category_id=languages.id),
    }


@pytest_asyncio.fixture
async def ana(db_session: AsyncSession, skills):
    """Offers Guitar, wants Spanish."""
    user = await UserFactory.create_async(db_session, first_name="Ana", username="ana", created_at=at(0))
    await UserSkillFactory.offered(db_session, user, skills["guitar"])
    await UserSkillFactory.wanted(db_session, user, skills["spanish"])
    return user


class TestComputeMatches:
    @pytest.mark.asyncio
    async def test_perfect_swap(self, async_client: AsyncClient, db_session, skills, ana):
        ben = await UserFactory.create_async(db_session, username="ben", created_at=at(1))
        await UserSkillFactory.offered(db_session, ben, skills["spanish"])
        await UserSkillFactory.wanted(db_session, ben, skills["guitar"])

        response = await async_client.get("/api/v1/matches", headers=auth_headers_for(ana))

        assert response.status_code == 200
        matches = response.json()["matches"]
        assert len(matches) == 1
        assert matches[0]["id"] == str(ben.id)
        assert matches[0]["match_type"] == "PERFECT_SWAP"
        assert matches[0]["match_score"] == 100

    @pytest.mark.asyncio
    async def test_teacher_only(self, async_client: AsyncClient, db_session, skills, ana):
        cara = await UserFactory.create_async(db_session, username="cara", created_at=at(1))
        await UserSkillFactory.offered(db_session, cara, skills["spanish"])

        response = await async_client.get("/api/v1/matches", headers=auth_headers_for(ana))

        matches = response.json()["matches"]
        assert [(m["username"], m["match_type"], m["match_score"]) for m in matches] == [
            ("cara", "TEACHER", 70)
        ]

    @pytest.mark.asyncio
    async def test_ranked_and_deduplicated(self, async_client: AsyncClient, db_session, skills, ana):
        learner = await UserFactory.create_async(db_session, username="learner", created_at=at(1))
        await UserSkillFactory.wanted(db_session, learner, skills["guitar"])

        teacher = await UserFactory.create_async(db_session, username="teacher", created_at=at(2))
        await UserSkillFactory.offered(db_session, teacher, skills["spanish"])

        swapper = await UserFactory.create_async(db_session, username="swapper", created_at=at(3))
        await UserSkillFactory.offered(db_session, swapper, skills["spanish"])
        await UserSkillFactory.wanted(db_session, swapper, skills["guitar"])

        stranger = await UserFactory.create_async(db_session, username="stranger", created_at=at(4))
        await UserSkillFactory.offered(db_session, stranger, skills["french"])

        response = await async_client.get("/api/v1/matches", headers=auth_headers_for(ana))

        matches = response.json()["matches"]
        assert [(m["username"], m["match_type"]) for m in matches] == [
            ("swapper", "PERFECT_SWAP"),
            ("teacher", "TEACHER"),
            ("learner", "LEARNER"),
        ]
        ids = [m["id"] for m in matches]
        assert len(ids) == len(set(ids))
        assert str(ana.id) not in ids

    @pytest.mark.asyncio
    async def test_type_filter(self, async_client: AsyncClient, db_session, skills, ana):
        swapper = await UserFactory.create_async(db_session, username="swapper", created_at=at(1))
        await UserSkillFactory.offered(db_session, swapper, skills["spanish"])
        await UserSkillFactory.wanted(db_session, swapper, skills["guitar"])
        learner = await UserFactory.create_async(db_session, username="learner", created_at=at(2))
        await UserSkillFactory.wanted(db_session, learner, skills["guitar"])

        response = await async_client.get(
            "/api/v1/matches", params={"type": "learners"}, headers=auth_headers_for(ana)
        )

        matches = response.json()["matches"]
        # Without the other categories, the swapper also qualifies as a learner
        assert {m["username"] for m in matches} == {"swapper", "learner"}
        assert all(m["match_type"] == "LEARNER" for m in matches)
        assert all(m["match_score"] == 60 for m in matches)

    @pytest.mark.asyncio
    async def test_invalid_type_filter(self, async_client: AsyncClient, ana):
        response = await async_client.get(
            "/api/v1/matches", params={"type": "everyone"}, headers=auth_headers_for(ana)
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_empty_ledger_has_no_matches(self, async_client: AsyncClient, db_session, skills, ana):
        loner = await UserFactory.create_async(db_session)

        response = await async_client.get("/api/v1/matches", headers=auth_headers_for(loner))

        assert response.status_code == 200
        assert response.json()["matches"] == []

    @pytest.mark.asyncio
    async def test_candidates_never_expose_credentials(self, async_client: AsyncClient, db_session, skills, ana):
        ben = await UserFactory.create_async(db_session, created_at=at(1))
        await UserSkillFactory.offered(db_session, ben, skills["spanish"])

        response = await async_client.get("/api/v1/matches", headers=auth_headers_for(ana))

        match = response.json()["matches"][0]
        assert "email" not in match
        assert "password_hash" not in match
        assert {e["skill"]["name"] for e in match["user_skills"]} == {"Spanish"}

    @pytest.mark.asyncio
    async def test_requires_auth(self, async_client: AsyncClient):
        response = await async_client.get("/api/v1/matches")
        assert response.status_code in (401, 403)

    @pytest.mark.asyncio
    async def test_invalid_token(self, async_client: AsyncClient):
        response = await async_client.get(
            "/api/v1/matches", headers={"Authorization": "Bearer not-a-token"}
        )
        assert response.status_code == 401


class TestMatchDetails:
    @pytest.mark.asyncio
    async def test_details_for_perfect_swap(self, async_client: AsyncClient, db_session, skills, ana):
        ben = await UserFactory.create_async(db_session, username="ben")
        await UserSkillFactory.offered(db_session, ben, skills["spanish"])
        await UserSkillFactory.wanted(db_session, ben, skills["guitar"])
        await VouchFactory.create_async(db_session, voucher_id=ana.id, vouched_id=ben.id, rating=4)

        response = await async_client.get(f"/api/v1/matches/{ben.id}", headers=auth_headers_for(ana))

        assert response.status_code == 200
        data = response.json()
        assert data["match_type"] == "PERFECT_SWAP"
        assert [e["skill"]["name"] for e in data["they_can_teach_me"]] == ["Spanish"]
        assert [e["skill"]["name"] for e in data["i_can_teach_them"]] == ["Guitar"]
        assert data["user"]["id"] == str(ben.id)
        assert "email" not in data["user"]
        assert [v["rating"] for v in data["user"]["received_vouches"]] == [4]

    @pytest.mark.asyncio
    async def test_details_no_match(self, async_client: AsyncClient, db_session, skills, ana):
        other = await UserFactory.create_async(db_session)
        await UserSkillFactory.offered(db_session, other, skills["french"])

        response = await async_client.get(f"/api/v1/matches/{other.id}", headers=auth_headers_for(ana))

        data = response.json()
        assert data["match_type"] == "NO_MATCH"
        assert data["they_can_teach_me"] == []
        assert data["i_can_teach_them"] == []

    @pytest.mark.asyncio
    async def test_unknown_user(self, async_client: AsyncClient, ana):
        response = await async_client.get(
            f"/api/v1/matches/{uuid.uuid4()}", headers=auth_headers_for(ana)
        )
        assert response.status_code == 404
        assert response.json()["detail"] == "User not found"


class TestSearchUsers:
    @pytest.mark.asyncio
    async def test_filters_combine(self, async_client: AsyncClient, db_session, skills, ana):
        porto_teacher = await UserFactory.create_async(
            db_session, first_name="Rita", location="Porto", created_at=at(1)
        )
        await UserSkillFactory.offered(db_session, porto_teacher, skills["spanish"])

        porto_learner = await UserFactory.create_async(
            db_session, first_name="Rui", location="Porto", created_at=at(2)
        )
        await UserSkillFactory.wanted(db_session, porto_learner, skills["spanish"])

        await UserFactory.create_async(db_session, first_name="Rosa", location="Faro", created_at=at(3))

        response = await async_client.get(
            "/api/v1/matches/search",
            params={"location": "porto", "category": "languages", "skill_type": "OFFERED"},
            headers=auth_headers_for(ana),
        )

        assert response.status_code == 200
        assert [u["id"] for u in response.json()["users"]] == [str(porto_teacher.id)]

    @pytest.mark.asyncio
    async def test_query_matches_names(self, async_client: AsyncClient, db_session, ana):
        rita = await UserFactory.create_async(db_session, first_name="Rita", username="rita_m")
        await UserFactory.create_async(db_session, first_name="Bruno", username="bruno")

        response = await async_client.get(
            "/api/v1/matches/search", params={"query": "RIT"}, headers=auth_headers_for(ana)
        )

        assert [u["id"] for u in response.json()["users"]] == [str(rita.id)]

    @pytest.mark.asyncio
    async def test_excludes_caller(self, async_client: AsyncClient, ana):
        response = await async_client.get(
            "/api/v1/matches/search", params={"query": "ana"}, headers=auth_headers_for(ana)
        )
        assert response.status_code == 200
        assert response.json()["users"] == []

    @pytest.mark.asyncio
    async def test_wildcard_characters_match_literally(self, async_client: AsyncClient, db_session, ana):
        await UserFactory.create_async(db_session, first_name="Rita", username="rita")
        bruno = await UserFactory.create_async(
            db_session, first_name="Bruno", username="bru_no", location="Faro"
        )

        percent = await async_client.get(
            "/api/v1/matches/search", params={"query": "%"}, headers=auth_headers_for(ana)
        )
        underscore_as_any = await async_client.get(
            "/api/v1/matches/search", params={"query": "i_a"}, headers=auth_headers_for(ana)
        )
        literal_underscore = await async_client.get(
            "/api/v1/matches/search", params={"query": "u_n"}, headers=auth_headers_for(ana)
        )
        location_percent = await async_client.get(
            "/api/v1/matches/search", params={"location": "%"}, headers=auth_headers_for(ana)
        )

        assert percent.json()["users"] == []
        assert underscore_as_any.json()["users"] == []
        assert [u["id"] for u in literal_underscore.json()["users"]] == [str(bruno.id)]
        assert location_percent.json()["users"] == []
