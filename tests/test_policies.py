"""Tests for the page replacement policies.

When every frame is taken and a page that isn't resident is referenced,
some resident page has to go.  The policies under test choose
differently:

    - FIFO: evict the oldest loaded page (can show Belady's anomaly).
    - LRU: evict the least recently used page.
    - OPT: evict the page used furthest in the future; never beaten.
"""

from random import Random

import pytest

from page_sim.policies import (
    FIFOPolicy,
    LRUPolicy,
    OPTPolicy,
    PolicyKind,
    UnsupportedPolicyError,
    policy_for,
)
from page_sim.refstring import generate

SCENARIO = [1, 2, 3, 1, 2, 4, 1, 2, 3]
SCENARIO_FRAMES = 3

BELADY = [1, 2, 3, 4, 1, 2, 5, 1, 2, 3, 4, 5]

ALL_POLICIES = [FIFOPolicy, LRUPolicy, OPTPolicy]


# -- Shared behaviour -----------------------------------------------------------


class TestSharedBehaviour:
    """Properties every policy must satisfy."""

    @pytest.mark.parametrize("policy_cls", ALL_POLICIES)
    @pytest.mark.parametrize("capacity", [1, 3, 7])
    def test_empty_string_has_no_faults(self, policy_cls: type, capacity: int) -> None:
        """Nothing referenced means nothing faulted."""
        assert policy_cls().replay([], capacity) == 0

    @pytest.mark.parametrize("policy_cls", ALL_POLICIES)
    def test_capacity_one_faults_on_every_reference(self, policy_cls: type) -> None:
        """With one frame, every (sanitized) reference evicts the previous page."""
        for seed in range(10):
            reference = generate(20, 9, rng=Random(seed))
            assert policy_cls().replay(reference, 1) == len(reference)

    @pytest.mark.parametrize("policy_cls", ALL_POLICIES)
    def test_cold_misses_only_when_everything_fits(self, policy_cls: type) -> None:
        """If all distinct pages fit, only first touches fault."""
        reference = [0, 1, 2, 0, 1, 2, 0]
        distinct = 3
        assert policy_cls().replay(reference, 7) == distinct

    @pytest.mark.parametrize("policy_cls", ALL_POLICIES)
    def test_zero_capacity_rejected(self, policy_cls: type) -> None:
        """A resident set with no frames cannot hold any page."""
        with pytest.raises(ValueError, match="Capacity"):
            policy_cls().replay([1, 2], 0)

    @pytest.mark.parametrize("policy_cls", ALL_POLICIES)
    def test_replay_does_not_mutate_reference(self, policy_cls: type) -> None:
        """Replay only reads the reference string."""
        reference = list(SCENARIO)
        policy_cls().replay(reference, SCENARIO_FRAMES)
        assert reference == SCENARIO

    @pytest.mark.parametrize("policy_cls", ALL_POLICIES)
    def test_policy_is_reusable(self, policy_cls: type) -> None:
        """A policy keeps no state between replays."""
        policy = policy_cls()
        first = policy.replay(SCENARIO, SCENARIO_FRAMES)
        assert policy.replay(SCENARIO, SCENARIO_FRAMES) == first


# -- FIFO -----------------------------------------------------------------------


class TestFIFOPolicy:
    """Verify First In, First Out replacement."""

    def test_scenario(self) -> None:
        """The reference scenario faults seven times under FIFO."""
        expected = 7
        assert FIFOPolicy().replay(SCENARIO, SCENARIO_FRAMES) == expected

    def test_hits_do_not_refresh(self) -> None:
        """Re-using page 1 doesn't save it: it was loaded first, so it goes first."""
        # 1 2 | 1 hit | 3 evicts 1 | 1 faults again
        expected = 4
        assert FIFOPolicy().replay([1, 2, 1, 3, 1], 2) == expected

    def test_beladys_anomaly(self) -> None:
        """More frames can mean more faults under FIFO."""
        three_frames = 9
        four_frames = 10
        assert FIFOPolicy().replay(BELADY, 3) == three_frames
        assert FIFOPolicy().replay(BELADY, 4) == four_frames


# -- LRU ------------------------------------------------------------------------


class TestLRUPolicy:
    """Verify Least Recently Used replacement."""

    def test_scenario(self) -> None:
        """The reference scenario faults five times under LRU."""
        expected = 5
        assert LRUPolicy().replay(SCENARIO, SCENARIO_FRAMES) == expected

    def test_hits_refresh_recency(self) -> None:
        """Re-using page 1 protects it; page 2 is evicted instead."""
        # 1 2 | 1 hit | 3 evicts 2 | 1 hit
        expected = 3
        assert LRUPolicy().replay([1, 2, 1, 3, 1], 2) == expected

    def test_belady_string(self) -> None:
        """LRU on the classic anomaly string with three frames."""
        expected = 10
        assert LRUPolicy().replay(BELADY, 3) == expected


# -- OPT ------------------------------------------------------------------------


class TestOPTPolicy:
    """Verify Belady's optimal replacement."""

    def test_scenario(self) -> None:
        """The reference scenario faults five times under OPT."""
        expected = 5
        assert OPTPolicy().replay(SCENARIO, SCENARIO_FRAMES) == expected

    def test_belady_string(self) -> None:
        """OPT on the classic anomaly string with three frames."""
        expected = 7
        assert OPTPolicy().replay(BELADY, 3) == expected

    def test_victim_is_furthest_next_use(self) -> None:
        """The page referenced last among residents is evicted."""
        reference = [1, 2, 3, 4, 2, 1, 3]
        # From index 4 on: 2 at 4, 1 at 5, 3 at 6.
        expected_victim = 3
        assert OPTPolicy.select_victim([1, 2, 3], reference, 4) == expected_victim

    def test_victim_prefers_never_used_again(self) -> None:
        """A page with no future use beats one used far in the future."""
        reference = [1, 2, 3, 9, 9, 9, 9, 1]
        expected_victim = 2
        assert OPTPolicy.select_victim([1, 2], reference, 3) == expected_victim

    def test_victim_tie_goes_to_oldest_resident(self) -> None:
        """Among several never-used-again pages, the oldest resident goes."""
        reference = [1, 2, 4, 5]
        expected_victim = 1
        assert OPTPolicy.select_victim([1, 2, 4], reference, 3) == expected_victim

    def test_victim_from_empty_raises(self) -> None:
        """There is nothing to evict from an empty resident set."""
        with pytest.raises(IndexError):
            OPTPolicy.select_victim([], [1], 0)

    @pytest.mark.parametrize("capacity", [1, 2, 3, 4, 5, 6, 7])
    def test_never_worse_than_fifo_or_lru(self, capacity: int) -> None:
        """OPT faults no more than FIFO or LRU on any string."""
        for seed in range(40):
            reference = generate(20, 9, rng=Random(seed))
            optimal = OPTPolicy().replay(reference, capacity)
            assert optimal <= FIFOPolicy().replay(reference, capacity)
            assert optimal <= LRUPolicy().replay(reference, capacity)


# -- Policy kinds ---------------------------------------------------------------


class TestPolicyKind:
    """Verify the closed set of policy selectors."""

    def test_three_kinds(self) -> None:
        """Exactly FIFO, LRU and OPT are supported."""
        assert [str(kind) for kind in PolicyKind] == ["FIFO", "LRU", "OPT"]

    @pytest.mark.parametrize(
        ("name", "kind"),
        [("FIFO", PolicyKind.FIFO), ("lru", PolicyKind.LRU), (" Opt ", PolicyKind.OPT)],
    )
    def test_parse_is_case_insensitive(self, name: str, kind: PolicyKind) -> None:
        """Names parse regardless of case and surrounding whitespace."""
        assert PolicyKind.parse(name) is kind

    def test_parse_passes_kind_through(self) -> None:
        """Parsing a PolicyKind returns it unchanged."""
        assert PolicyKind.parse(PolicyKind.LRU) is PolicyKind.LRU

    @pytest.mark.parametrize("name", ["CLOCK", "", "fifo2"])
    def test_parse_unknown_raises(self, name: str) -> None:
        """Unknown names are rejected."""
        with pytest.raises(UnsupportedPolicyError, match="Unsupported"):
            PolicyKind.parse(name)

    def test_parse_non_string_raises(self) -> None:
        """Selectors that aren't names are rejected too."""
        with pytest.raises(UnsupportedPolicyError):
            PolicyKind.parse(2)  # type: ignore[arg-type]

    @pytest.mark.parametrize(
        ("kind", "policy_cls"),
        [(PolicyKind.FIFO, FIFOPolicy), (PolicyKind.LRU, LRUPolicy), (PolicyKind.OPT, OPTPolicy)],
    )
    def test_policy_for_maps_kinds(self, kind: PolicyKind, policy_cls: type) -> None:
        """Each kind maps to its own implementation."""
        assert isinstance(policy_for(kind), policy_cls)

    def test_policy_for_returns_fresh_instances(self) -> None:
        """Every call builds a new policy object."""
        assert policy_for(PolicyKind.OPT) is not policy_for(PolicyKind.OPT)

    def test_policy_for_unknown_raises(self) -> None:
        """An unknown selector is a programming error."""
        with pytest.raises(UnsupportedPolicyError):
            policy_for("MRU")
