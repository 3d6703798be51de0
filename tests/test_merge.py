"""Unit tests for merging updates and imported use cases."""

from maturity_dashboard.data.merge import merge_updates, merge_use_cases
from maturity_dashboard.data.models import (
    ChannelLevelsUpdate,
    ProductionStatus,
    TargetLevelUpdate,
    UseCase,
)


# =============================================================================
# Partial Update Merge Tests
# =============================================================================


def test_merge_overlays_target_level() -> None:
    """Test that a matching update replaces only the target level."""
    base = [UseCase(id="U1", name="A", target_level=1)]
    merged = merge_updates(base, [TargetLevelUpdate(id="U1", target_level=4)])
    assert merged == [UseCase(id="U1", name="A", target_level=4)]


def test_merge_without_match_is_unchanged() -> None:
    """Test that an update for an unknown id leaves the base untouched."""
    base = [UseCase(id="U1", name="A", target_level=1)]
    assert merge_updates(base, [TargetLevelUpdate(id="U2", target_level=4)]) == base


def test_merge_preserves_length_and_order(existing_use_cases) -> None:
    """Test order and identity preservation across mixed matches."""
    updates = [
        TargetLevelUpdate(id="U2", target_level=5),
        TargetLevelUpdate(id="U9", target_level=2),
    ]
    merged = merge_updates(existing_use_cases, updates)
    assert len(merged) == len(existing_use_cases)
    assert [uc.id for uc in merged] == [uc.id for uc in existing_use_cases]
    assert merged[0] == existing_use_cases[0]
    assert merged[1].target_level == 5
    assert merged[1].name == existing_use_cases[1].name


def test_merge_does_not_mutate_inputs(existing_use_cases) -> None:
    """Test that the base collection is returned as a new list."""
    snapshot = list(existing_use_cases)
    merged = merge_updates(existing_use_cases, [TargetLevelUpdate(id="U1", target_level=5)])
    assert merged is not existing_use_cases
    assert existing_use_cases == snapshot
    assert existing_use_cases[0].target_level == 3


def test_merge_first_duplicate_update_wins() -> None:
    """Test that the first update for an id is applied."""
    base = [UseCase(id="U1", name="A")]
    updates = [TargetLevelUpdate(id="U1", target_level=2), TargetLevelUpdate(id="U1", target_level=5)]
    assert merge_updates(base, updates)[0].target_level == 2


def test_merge_none_update_keeps_base_value() -> None:
    """Test that an unparsable target level does not erase the existing one."""
    base = [UseCase(id="U1", name="A", target_level=3)]
    assert merge_updates(base, [TargetLevelUpdate(id="U1", target_level=None)]) == base


def test_merge_channel_levels() -> None:
    """Test that channel level updates replace the channel map."""
    base = [UseCase(id="U1", name="A", channel_levels={"Email": 1})]
    merged = merge_updates(base, [ChannelLevelsUpdate(id="U1", channel_levels={"Email": 3, "SMS": 0})])
    assert merged[0].channel_levels == {"Email": 3, "SMS": 0}


# =============================================================================
# Use Case Import Merge Tests
# =============================================================================


def test_merge_use_cases_overlays_and_appends(existing_use_cases) -> None:
    """Test that matches are overlaid in place and new ids are appended."""
    imported = [
        UseCase(id="U3", name="New One", category="Ops"),
        UseCase(id="U1", name="Churn Prediction v2", current_level=2),
    ]
    merged = merge_use_cases(existing_use_cases, imported)
    assert [uc.id for uc in merged] == ["U1", "U2", "U3"]
    assert merged[0].name == "Churn Prediction v2"
    assert merged[0].current_level == 2
    assert merged[1] == existing_use_cases[1]
    assert merged[2].category == "Ops"


def test_merge_use_cases_blank_fields_keep_existing(existing_use_cases) -> None:
    """Test that empty imported fields and unknown status keep existing values."""
    imported = [UseCase(id="U1", name="Churn Prediction", category="", target_level=None)]
    (merged, _) = merge_use_cases(existing_use_cases, imported)
    assert merged.category == "Retention"
    assert merged.target_level == 3
    assert merged.description == "Flag customers likely to leave"
    assert merged.production_status is ProductionStatus.IN_PRODUCTION


def test_merge_use_cases_into_empty_collection() -> None:
    """Test that an import into an empty collection keeps import order."""
    imported = [UseCase(id="B", name="b"), UseCase(id="A", name="a"), UseCase(id="B", name="dup")]
    merged = merge_use_cases([], imported)
    assert [(uc.id, uc.name) for uc in merged] == [("B", "b"), ("A", "a")]
