import pytest
from mahjong.tile import TilesConverter

from tilegame.logic.hand import can_win_with, is_winning_counts, is_winning_hand
from tilegame.logic.rng import PCG64DXSM, fisher_yates_shuffle
from tilegame.tests.unit.helpers import TileAllocator


class TestIsWinningHand:
    def test_all_triplets(self):
        tiles = TilesConverter.string_to_136_array(man="111", pin="222", sou="333", honors="55566")
        assert is_winning_hand(tiles)

    def test_runs_and_pair(self):
        tiles = TilesConverter.string_to_136_array(man="123456789", pin="234", sou="55")
        assert is_winning_hand(tiles)

    def test_east_triplet_red_pair_hand(self):
        allocator = TileAllocator()
        # 123m 44m 789p EEE RedRed waits on 4m or Red
        hand = allocator.take(man="12344", pin="789", honors="11177")
        assert len(hand) == 13
        assert can_win_with(hand, allocator.take(honors="7")[0])
        assert can_win_with(hand, allocator.take(man="4")[0])
        assert not can_win_with(hand, allocator.take(man="5")[0])

    def test_honors_never_form_runs(self):
        tiles = TilesConverter.string_to_136_array(man="111222333", honors="12355")
        assert not is_winning_hand(tiles)

    def test_runs_do_not_wrap_across_suits(self):
        tiles = TilesConverter.string_to_136_array(man="89111", pin="1555", sou="22233")
        assert not is_winning_hand(tiles)

    def test_tile_order_does_not_matter(self):
        tiles = TilesConverter.string_to_136_array(man="112233", pin="456", sou="789", honors="22")
        pcg = PCG64DXSM(state=2024, increment=7)
        for _ in range(10):
            assert is_winning_hand(fisher_yates_shuffle(tiles, pcg))

    @pytest.mark.parametrize("size", [13, 15, 0])
    def test_count_must_be_two_mod_three(self, size):
        tiles = TilesConverter.string_to_136_array(man="111222333444", sou="555")[:size]
        assert not is_winning_hand(tiles)

    def test_smaller_hand_after_reveals(self):
        # one triplet revealed leaves 11 concealed tiles
        tiles = TilesConverter.string_to_136_array(man="123", pin="456", sou="789", honors="22")
        assert is_winning_hand(tiles)

    def test_lone_pair(self):
        assert is_winning_hand(TilesConverter.string_to_136_array(honors="77"))

    def test_incomplete_hand(self):
        tiles = TilesConverter.string_to_136_array(man="1357", pin="2468", sou="1357", honors="12")
        assert not is_winning_hand(tiles)


class TestIsWinningCounts:
    def test_nine_gates_shape_needs_every_pair_candidate(self):
        # 1112345678999m + 5m: only the 55 pair leaves a complete remainder
        tiles = TilesConverter.string_to_34_array(man="11123455678999")
        assert is_winning_counts(tiles)

    def test_does_not_modify_input(self):
        counts = TilesConverter.string_to_34_array(man="123456789", pin="234", sou="55")
        before = list(counts)
        is_winning_counts(counts)
        assert counts == before
