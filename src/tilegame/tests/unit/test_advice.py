import asyncio

from mahjong.tile import TilesConverter

from tilegame.logic.advice import FALLBACK_RATIONALE, recommend_discard

HAND = TilesConverter.string_to_136_array(man="123", pin="55", honors="17")


class FakeAdvisor:
    def __init__(self, reply):
        self.reply = reply
        self.seen: list[list[str]] = []

    async def request_discard(self, tiles):
        self.seen.append(tiles)
        return self.reply


class RaisingAdvisor:
    def __init__(self, error):
        self.error = error

    async def request_discard(self, tiles):
        raise self.error


class HangingAdvisor:
    async def request_discard(self, tiles):
        await asyncio.Event().wait()


class TestRecommendDiscard:
    async def test_uses_named_tile(self):
        advisor = FakeAdvisor({"discard": "red", "explanation": "Isolated honor."})
        recommendation = await recommend_discard(HAND, advisor)
        assert recommendation.tile_id == HAND[-1]
        assert recommendation.rationale == "Isolated honor."
        assert not recommendation.is_fallback

    async def test_sends_readable_names(self):
        advisor = FakeAdvisor(None)
        await recommend_discard(HAND, advisor)
        assert advisor.seen == [["1m", "2m", "3m", "5p", "5p", "East", "Red"]]

    async def test_no_advisor_falls_back_to_first_tile(self):
        recommendation = await recommend_discard(HAND, None)
        assert recommendation.tile_id == HAND[0]
        assert recommendation.rationale == FALLBACK_RATIONALE
        assert recommendation.is_fallback

    async def test_failed_request_falls_back(self):
        recommendation = await recommend_discard(HAND, FakeAdvisor(None))
        assert recommendation.is_fallback

    async def test_tile_not_in_hand_falls_back(self):
        recommendation = await recommend_discard(HAND, FakeAdvisor({"discard": "9s", "explanation": "x"}))
        assert recommendation.tile_id == HAND[0]
        assert recommendation.is_fallback

    async def test_unparseable_name_falls_back(self):
        recommendation = await recommend_discard(HAND, FakeAdvisor({"discard": "the dragon"}))
        assert recommendation.is_fallback

    async def test_missing_discard_falls_back(self):
        recommendation = await recommend_discard(HAND, FakeAdvisor({"explanation": "hmm"}))
        assert recommendation.is_fallback

    async def test_missing_explanation_is_empty(self):
        recommendation = await recommend_discard(HAND, FakeAdvisor({"discard": "5p"}))
        assert recommendation.tile_id == HAND[3]
        assert recommendation.rationale == ""

    async def test_advisor_timeout_error_falls_back(self):
        recommendation = await recommend_discard(HAND, RaisingAdvisor(TimeoutError("advisor hung")))
        assert recommendation.tile_id == HAND[0]
        assert recommendation.is_fallback

    async def test_advisor_exception_falls_back(self):
        recommendation = await recommend_discard(HAND, RaisingAdvisor(RuntimeError("boom")))
        assert recommendation.tile_id == HAND[0]
        assert recommendation.rationale == FALLBACK_RATIONALE

    async def test_hanging_advisor_is_time_bounded(self):
        recommendation = await asyncio.wait_for(
            recommend_discard(HAND, HangingAdvisor(), timeout_seconds=0.05),
            timeout=2.0,
        )
        assert recommendation.is_fallback

