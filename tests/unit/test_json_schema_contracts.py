"""
Tests for JSON Schema Contract Validators

Комплексное тестирование JSON Schema валидаторов:
- Валидность самих схем
- Валидация событий и снапшотов, созданных RoundController
- Детекция нарушений required полей, типов и constraints
"""

from pathlib import Path

import pytest
from jsonschema import ValidationError

from gridpool.core.contracts import (
    RoundEventValidator,
    RoundSnapshotValidator,
    SchemaLoader,
    validate_round_event,
    validate_round_snapshot,
)
from gridpool.core.domain import Cell, RoundError
from gridpool.core.domain.events import BetRejected, RoundReset
from gridpool.engine import FixedRandomSource, WalkConfig
from gridpool.round import RoundConfig, RoundController


@pytest.fixture
def controller() -> RoundController:
    config = RoundConfig(walk=WalkConfig(start_cell=Cell(row=5, col=5)))
    return RoundController(config, rng=FixedRandomSource(0))


# =============================================================================
# SCHEMA LOADING
# =============================================================================


class TestSchemaLoader:
    def test_schemas_load(self):
        loader = SchemaLoader()
        for name in ("round_event", "round_snapshot"):
            schema = loader.load_schema(name)
            assert schema["$schema"].endswith("2020-12/schema")

    def test_schema_cached(self):
        loader = SchemaLoader()
        assert loader.load_schema("round_event") is loader.load_schema("round_event")

    def test_missing_schema(self):
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("does_not_exist")

    def test_schemas_ship_inside_package(self):
        """Схемы читаются из ресурсов пакета, а не из корня checkout."""
        import gridpool.core.contracts as contracts_pkg

        loader = SchemaLoader()

        assert loader.available() == ["round_event", "round_snapshot"]
        assert (loader.root / "round_event.json").is_file()
        assert Path(contracts_pkg.__file__).parent / "schema" == Path(str(loader.root))

    def test_error_messages_point_to_field(self, controller):
        data = controller.snapshot().to_dict()
        data["balance"] = -5

        messages = RoundSnapshotValidator().error_messages(data)

        assert len(messages) == 1
        assert messages[0].startswith("balance: ")

    def test_error_messages_empty_for_valid(self, controller):
        data = controller.snapshot().to_dict()
        assert RoundSnapshotValidator().error_messages(data) == []


# =============================================================================
# EVENTS
# =============================================================================


class TestRoundEventContract:
    def test_full_round_events_valid(self, controller):
        events = []
        controller.subscribe(events.append)

        controller.set_volatility(2)
        controller.place_bet((5, 5), 10)
        controller.place_bet((0, 0), 10_000)
        controller.play()
        controller.reset()

        assert len(events) > 5
        for event in events:
            validate_round_event(event.to_dict())

    def test_cancelled_reset_valid(self):
        validate_round_event(RoundReset(cancelled_round_id=3).to_dict())

    def test_rejection_reason_serialized(self):
        data = BetRejected(reason=RoundError.NO_BETS_PLACED, details="x").to_dict()
        assert data["reason"] == "NO_BETS_PLACED"
        validate_round_event(data)

    def test_unknown_event_type_rejected(self):
        with pytest.raises(ValidationError):
            validate_round_event({"event_type": "JACKPOT"})

    def test_missing_required_field(self):
        validator = RoundEventValidator()
        data = {
            "event_type": "PATH_STEP",
            "round_id": 1,
            "time_index": 0,
        }
        assert not validator.is_valid(data)

    def test_negative_coordinate_rejected(self):
        data = {
            "event_type": "PATH_STEP",
            "round_id": 1,
            "time_index": 0,
            "cell": {"row": -1, "col": 0},
        }
        with pytest.raises(ValidationError):
            validate_round_event(data)

    def test_unknown_reason_rejected(self):
        data = {"event_type": "BET_REJECTED", "reason": "TILT", "details": ""}
        errors = list(RoundEventValidator().iter_errors(data))
        assert errors


# =============================================================================
# SNAPSHOTS
# =============================================================================


class TestRoundSnapshotContract:
    def test_snapshots_valid_across_phases(self, controller):
        validate_round_snapshot(controller.snapshot().to_dict())

        controller.place_bet((5, 5), 10)
        validate_round_snapshot(controller.snapshot().to_dict())

        controller.start()
        controller.advance()
        validate_round_snapshot(controller.snapshot().to_dict())

        list(controller.run())
        validate_round_snapshot(controller.snapshot().to_dict())

    def test_invalid_phase_rejected(self, controller):
        data = controller.snapshot().to_dict()
        data["phase"] = "PAUSED"

        assert not RoundSnapshotValidator().is_valid(data)

    def test_negative_balance_rejected(self, controller):
        data = controller.snapshot().to_dict()
        data["balance"] = -5

        with pytest.raises(ValidationError):
            validate_round_snapshot(data)
