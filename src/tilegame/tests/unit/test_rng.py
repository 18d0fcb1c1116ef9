import pytest

from tilegame.logic.rng import (
    PCG64DXSM,
    SEED_BYTES,
    DecisionRng,
    fisher_yates_shuffle,
    generate_seed,
    generate_shuffled_tiles,
    validate_seed_hex,
)
from tilegame.tests.unit.helpers import FIXED_SEED


class TestSeedValidation:
    def test_generated_seed_is_valid(self):
        seed = generate_seed()
        assert len(seed) == SEED_BYTES * 2
        validate_seed_hex(seed)

    def test_wrong_length(self):
        with pytest.raises(ValueError, match="exactly"):
            validate_seed_hex("ab")

    def test_not_hex(self):
        with pytest.raises(ValueError, match="invalid hex"):
            validate_seed_hex("zz" * SEED_BYTES)

    def test_not_a_string(self):
        with pytest.raises(TypeError):
            validate_seed_hex(123)


class TestShuffle:
    def test_is_permutation(self):
        assert sorted(generate_shuffled_tiles(FIXED_SEED, 0)) == list(range(136))

    def test_deterministic(self):
        assert generate_shuffled_tiles(FIXED_SEED, 0) == generate_shuffled_tiles(FIXED_SEED, 0)

    def test_game_number_changes_order(self):
        assert generate_shuffled_tiles(FIXED_SEED, 0) != generate_shuffled_tiles(FIXED_SEED, 1)

    def test_seed_changes_order(self):
        assert generate_shuffled_tiles(FIXED_SEED, 0) != generate_shuffled_tiles("cd" * SEED_BYTES, 0)

    def test_input_not_modified(self):
        items = [1, 2, 3, 4]
        fisher_yates_shuffle(items, PCG64DXSM(state=1, increment=1))
        assert items == [1, 2, 3, 4]

    def test_game_number_bounds(self):
        with pytest.raises(ValueError, match="game_number"):
            generate_shuffled_tiles(FIXED_SEED, -1)


class TestDecisionRng:
    def test_reproducible_sequence(self):
        first = DecisionRng(FIXED_SEED, 3)
        second = DecisionRng(FIXED_SEED, 3)
        assert [first.randbelow(100) for _ in range(20)] == [second.randbelow(100) for _ in range(20)]

    def test_independent_from_wall_stream(self):
        rng = DecisionRng(FIXED_SEED, 0)
        assert [rng.randbelow(136) for _ in range(10)] != generate_shuffled_tiles(FIXED_SEED, 0)[:10]

    def test_choice_stays_in_sequence(self):
        rng = DecisionRng(FIXED_SEED)
        items = ("a", "b", "c")
        assert all(rng.choice(items) in items for _ in range(50))

    def test_choice_empty(self):
        with pytest.raises(IndexError):
            DecisionRng(FIXED_SEED).choice([])

    def test_uniform_range(self):
        rng = DecisionRng(FIXED_SEED)
        values = [rng.uniform(1.5, 2.0) for _ in range(200)]
        assert all(1.5 <= v < 2.0 for v in values)
        assert len(set(values)) > 1
