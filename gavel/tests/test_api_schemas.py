"""
Tests for API Pydantic schemas.

Validates that:
- Request models enforce their bounds
- Response models serialize enums as plain strings
- Error codes are properly structured
- The OpenAPI schema lists every endpoint and model
"""

import pytest
from pydantic import ValidationError


class TestPydanticSchemas:
    """Tests for Pydantic schema validation."""

    def test_bootstrap_defaults(self):
        """BootstrapRequest fills skills and config defaults."""
        from gavel.api.schemas import BootstrapRequest

        request = BootstrapRequest(car_valuation=20000, rival_id="scrapyard_joe", player_money=5000)

        assert request.player_skills.inspection == 1
        assert request.player_skills.tactics == 1
        assert request.config.bid_increment is None
        assert request.car_tags == []
        assert request.auto_rival is True

    def test_bootstrap_bounds(self):
        """Interest and patience are bounded to 0-100."""
        from gavel.api.schemas import BootstrapRequest

        with pytest.raises(ValidationError):
            BootstrapRequest(car_valuation=20000, rival_id="x", player_money=1, interest=101)

        with pytest.raises(ValidationError):
            BootstrapRequest(
                car_valuation=20000,
                player_money=1,
                interest=50,
                rival_profile={"strategy": "Passive", "base_patience": 150, "budget": 100},
            )

    def test_unknown_strategy_rejected(self):
        from gavel.api.schemas import RivalProfileIn

        with pytest.raises(ValidationError):
            RivalProfileIn(strategy="Sneaky", base_patience=50, budget=100)

    def test_action_request(self):
        """ActionRequest accepts tactics and positive amounts only."""
        from gavel.api.schemas import ActionRequest, ActionName

        request = ActionRequest(action="power_bid", amount=800)
        assert request.action == ActionName.POWER_BID

        with pytest.raises(ValidationError):
            ActionRequest(action="bid", amount=0)

        with pytest.raises(ValidationError):
            ActionRequest(action="sneeze")

    def test_error_response_schema(self):
        """ErrorResponse has proper structure."""
        from gavel.api.schemas import ErrorResponse, ErrorCode

        error = ErrorResponse(
            error="Session not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
            details={"session_id": "abc"},
        )

        data = error.model_dump(mode="json")
        assert data["error_code"] == "SESSION_NOT_FOUND"
        assert data["details"]["session_id"] == "abc"
        assert data["api_version"] == "v1"

    def test_transition_info_schema(self):
        """TransitionInfo carries rejection and effects."""
        from gavel.api.schemas import TransitionInfo, RejectionInfo, EffectInfo

        info = TransitionInfo(
            accepted=False,
            rejection=RejectionInfo(code="INSUFFICIENT_FUNDS", message="Not enough money"),
            effects=[EffectInfo(type="toast", text="Not enough money", level="error")],
        )

        data = info.model_dump()
        assert data["accepted"] is False
        assert data["rejection"]["code"] == "INSUFFICIENT_FUNDS"
        assert data["effects"][0]["at_ms"] == 0
        assert data["resolved"] is None


class TestErrorCodes:
    """Tests for error code structure."""

    def test_all_error_codes_defined(self):
        """All documented error codes exist."""
        from gavel.api.schemas import ErrorCode

        expected = [
            "VALIDATION_ERROR",
            "SESSION_NOT_FOUND",
            "UNKNOWN_RIVAL",
            "INVALID_BOOTSTRAP",
        ]
        for code in expected:
            assert hasattr(ErrorCode, code)

    def test_error_code_values_are_strings(self):
        """Error code values are UPPER_SNAKE strings."""
        from gavel.api.schemas import ErrorCode

        for code in ErrorCode:
            assert isinstance(code.value, str)
            assert code.value == code.value.upper()

    def test_rejection_codes_are_strings(self):
        from gavel.engine_core.action import RejectionCode

        for code in RejectionCode:
            assert code.value == code.name


class TestOpenAPISchema:
    """Tests for OpenAPI schema generation."""

    @pytest.fixture
    def schema(self):
        from gavel.api.app import app
        from fastapi.openapi.utils import get_openapi

        return get_openapi(
            title=app.title,
            version=app.version,
            routes=app.routes,
        )

    def test_openapi_schema_generates(self, schema):
        """OpenAPI schema generates without errors."""
        assert "paths" in schema
        assert "components" in schema
        assert "schemas" in schema["components"]

    def test_response_models_in_schema(self, schema):
        """Response models appear in OpenAPI schema."""
        schemas = schema["components"]["schemas"]

        for name in [
            "AuctionResponse",
            "AuctionStateResponse",
            "AuctionListResponse",
            "EndAuctionResponse",
            "RivalListResponse",
            "ErrorResponse",
            "HealthResponse",
            "BootstrapRequest",
            "ActionRequest",
        ]:
            assert name in schemas, f"Missing schema: {name}"

    def test_endpoints_present(self, schema):
        paths = schema["paths"]

        assert "post" in paths["/api/v1/auctions"]
        assert "get" in paths["/api/v1/auctions"]
        assert "get" in paths["/api/v1/auctions/{session_id}"]
        assert "delete" in paths["/api/v1/auctions/{session_id}"]
        assert "post" in paths["/api/v1/auctions/{session_id}/actions"]
        assert "post" in paths["/api/v1/auctions/{session_id}/rival-turn"]
        assert "get" in paths["/api/v1/rivals"]
        assert "get" in paths["/health"]
