from __future__ import annotations

from rabbitry.domain.services.culling import CullingReason, evaluate


def test_three_small_litters_recommend_culling():
    decision = evaluate([4, 3, 4], current_litter_size=None)
    assert decision.recommend
    assert decision.reasons == (CullingReason.CHRONIC_SMALL_LITTERS,)


def test_fewer_than_three_litters_is_not_chronic():
    assert not evaluate([2, 1]).recommend


def test_only_three_most_recent_litters_count():
    assert not evaluate([8, 3, 4, 2]).recommend
    assert evaluate([3, 4, 2, 9]).recommend


def test_out_of_range_current_litter():
    assert evaluate([12, 7, 8], current_litter_size=12).reasons == (
        CullingReason.OUT_OF_RANGE_LITTER_SIZE,
    )
    assert evaluate([7], current_litter_size=4).recommend
    assert not evaluate([10, 5], current_litter_size=10).recommend
    assert not evaluate([5], current_litter_size=5).recommend


def test_both_reasons_reported():
    decision = evaluate([3, 4, 2], current_litter_size=3)
    assert decision.reasons == (
        CullingReason.CHRONIC_SMALL_LITTERS,
        CullingReason.OUT_OF_RANGE_LITTER_SIZE,
    )
