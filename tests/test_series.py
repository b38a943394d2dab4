import random
from datetime import datetime, timedelta

import pytest

from classifier import Level, SingleSidedScheme
from config import SeriesConfig, variant_b
from series import IndexPolicy, RegimeBiasedWalk, SeriesStore, UniformWalk, clamp


def test_initialize_fills_capacity_with_contiguous_indices(fixed_random, fixed_clock):
    cfg = SeriesConfig(capacity=5)
    store = SeriesStore(cfg, rng=fixed_random(), clock=fixed_clock)
    samples = store.snapshot()
    assert len(store) == 5
    assert [s.index for s in samples] == [0, 1, 2, 3, 4]
    # base uniform(15, 25) at midpoint, zero noise
    assert all(s.temperature == pytest.approx(20.0) for s in samples)
    now = fixed_clock()
    assert samples[0].timestamp == now - timedelta(seconds=5)
    assert samples[-1].timestamp == now - timedelta(seconds=1)
    assert store.current_value() == samples[-1].temperature


def test_seeded_advance_end_to_end(fixed_random, fixed_clock):
    cfg = SeriesConfig(min_temp=10, max_temp=50, capacity=5)
    store = SeriesStore(cfg, rng=fixed_random(values=(0.5,), fraction=0.75), clock=fixed_clock)
    store.seed([20, 21, 22, 23, 24])

    new = store.advance()  # 24 + uniform(-10, 10) -> 24 + 5
    assert new.index == 5
    assert new.temperature == pytest.approx(29.0)
    assert new.timestamp == fixed_clock()
    assert store.evicted.index == 0
    assert store.evicted.temperature == 20
    assert [s.temperature for s in store.snapshot()] == pytest.approx([21, 22, 23, 24, 29])
    assert [s.index for s in store.snapshot()] == [1, 2, 3, 4, 5]

    store.advance()  # 34
    store.advance()  # 39, now above the regime threshold
    cooled = store.advance()  # random() 0.5 < 0.7 -> 39 - uniform(0, 10)
    assert cooled.temperature == pytest.approx(31.5)
    assert [s.temperature for s in store.snapshot()] == pytest.approx([24, 29, 34, 39, 31.5])
    assert store.current_value() == pytest.approx(31.5)


def test_hot_regime_without_cooling_uses_narrow_jitter(fixed_random):
    walk = RegimeBiasedWalk(35.0)
    rng = fixed_random(values=(0.9,), fraction=1.0)
    assert walk(40.0, rng) == pytest.approx(45.0)
    assert walk(35.0, rng) == pytest.approx(45.0)  # 35 is not above the threshold


def test_clamp_invariant_holds_for_init_and_every_advance():
    for min_temp, max_temp in [(-10, 50), (10, 12)]:
        store = SeriesStore(SeriesConfig(min_temp=min_temp, max_temp=max_temp), rng=random.Random(7))
        assert all(min_temp <= s.temperature <= max_temp for s in store.snapshot())
        for _ in range(2000):
            sample = store.advance()
            assert min_temp <= sample.temperature <= max_temp


def test_length_never_exceeds_capacity_and_oldest_is_evicted():
    store = SeriesStore(SeriesConfig(capacity=8), rng=random.Random(3))
    for _ in range(100):
        before = store.snapshot()
        store.advance()
        after = store.snapshot()
        assert len(after) == 8
        assert store.evicted == before[0]
        assert after[:-1] == before[1:]
        assert store.current_value() == after[-1].temperature


def test_partially_filled_buffer_grows_without_eviction(fixed_random):
    store = SeriesStore(SeriesConfig(capacity=4), rng=fixed_random())
    store.seed([20.0, 21.0])
    store.advance()
    assert len(store) == 3
    assert store.evicted is None
    assert [s.index for s in store.snapshot()] == [0, 1, 2]


def test_mean_reversion_above_threshold():
    rng = random.Random(1234)
    store = SeriesStore(SeriesConfig(), rng=rng)
    lower = 0
    trials = 10_000
    for _ in range(trials):
        store.seed([40.0])
        if store.advance().temperature < 40.0:
            lower += 1
    assert lower / trials > 0.55


def test_positional_index_policy_reuses_buffer_length(fixed_random):
    cfg = variant_b(capacity=3).series
    assert cfg.index_policy is IndexPolicy.POSITIONAL
    store = SeriesStore(cfg, rng=fixed_random())
    assert [s.temperature for s in store.snapshot()] == pytest.approx([20.0, 20.0, 20.0])
    sample = store.advance()
    assert sample.index == 2
    assert [s.index for s in store.snapshot()] == [1, 2, 2]


def test_uniform_walk_step_is_bounded_by_half_variation(fixed_random):
    walk = UniformWalk(5.0)
    assert walk(20.0, fixed_random(values=(1.0,))) == pytest.approx(22.5)
    assert walk(20.0, fixed_random(values=(0.0,))) == pytest.approx(17.5)


def test_reset_discards_advanced_state(fixed_random):
    store = SeriesStore(SeriesConfig(capacity=5), rng=fixed_random(fraction=0.75))
    for _ in range(7):
        store.advance()
    store.reset()
    assert [s.index for s in store.snapshot()] == [0, 1, 2, 3, 4]
    assert store.evicted is None
    assert store.current_value() == store.snapshot()[-1].temperature


def test_seed_clamps_and_keeps_latest_values(fixed_random):
    store = SeriesStore(SeriesConfig(min_temp=0, max_temp=30, capacity=3), rng=fixed_random())
    store.seed([1, 2, 45, -5, 10], start=datetime(2026, 2, 1, 12, 0, 0))
    samples = store.snapshot()
    assert [s.temperature for s in samples] == [30, 0, 10]
    assert samples[0].timestamp == datetime(2026, 2, 1, 12, 0, 0)
    assert samples[2].timestamp == datetime(2026, 2, 1, 12, 0, 2)
    with pytest.raises(ValueError):
        store.seed([])


def test_invalid_bounds_rejected():
    with pytest.raises(ValueError):
        SeriesConfig(min_temp=20, max_temp=20)
    with pytest.raises(ValueError):
        SeriesConfig(capacity=0)


def test_clamp_is_total():
    assert clamp(-100.0, -10.0, 50.0) == -10.0
    assert clamp(100.0, -10.0, 50.0) == 50.0
    assert clamp(12.5, -10.0, 50.0) == 12.5


def test_danger_boundary_reading_still_walks_in_normal_regime(fixed_random):
    assert SingleSidedScheme().classify_color(35.0) is Level.DANGER
    rng = fixed_random(values=(0.0,), fraction=0.0)
    # no cooling coin flip at exactly 35.0, only the wide symmetric step
    assert RegimeBiasedWalk(35.0)(35.0, rng) == pytest.approx(25.0)
    assert rng.calls == 0
