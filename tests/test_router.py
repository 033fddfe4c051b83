"""Tests for tools/router.py — regex-based intent routing."""
from seattle_guide.tools.registry import ToolName
from seattle_guide.tools.router import route, _strip_punctuation, RouteMatch


class TestStripPunctuation:
    def test_trailing(self):
        assert _strip_punctuation("belltown?") == "belltown"
        assert _strip_punctuation("end.") == "end"
        assert _strip_punctuation("wow!!!") == "wow"

    def test_no_punctuation(self):
        assert _strip_punctuation("Fremont") == "Fremont"
        assert _strip_punctuation("") == ""


class TestDirectionsRouting:
    def test_how_can_i_get_from_to(self):
        r = route("how can I get from ballard to belltown?")
        assert isinstance(r, RouteMatch)
        assert r.tool == ToolName.GET_DIRECTIONS
        assert r.args == {"origin": "ballard", "destination": "belltown"}

    def test_directions_from_to(self):
        r = route("Directions from Fremont to Capitol Hill")
        assert r.tool == ToolName.GET_DIRECTIONS
        assert r.args["origin"] == "Fremont"
        assert r.args["destination"] == "Capitol Hill"

    def test_to_before_from(self):
        r = route("How do I get to Pike Place Market from Ballard?")
        assert r.tool == ToolName.GET_DIRECTIONS
        assert r.args == {"origin": "Ballard", "destination": "Pike Place Market"}

    def test_hint(self):
        r = route("how do I get from Ballard to Fremont")
        assert r.reply_hint == "Getting directions from Ballard to Fremont"


class TestGeocodeRouting:
    def test_where_is(self):
        r = route("Where is the Space Needle?")
        assert r.tool == ToolName.GET_LAT_LONG_OF_LOCATION
        assert r.args["location"] == "the Space Needle"

    def test_coordinates_of(self):
        r = route("coordinates of Gas Works Park")
        assert r.tool == ToolName.GET_LAT_LONG_OF_LOCATION
        assert r.args["location"] == "Gas Works Park"


class TestPlaceSearchRouting:
    def test_find(self):
        r = route("find brunch near me")
        assert r.tool == ToolName.SEARCH_FOR_PLACES
        assert r.args == {"query": "brunch"}

    def test_where_can_i_get(self):
        r = route("Where can I get coffee?")
        assert r.tool == ToolName.SEARCH_FOR_PLACES
        assert r.args["query"] == "coffee"

    def test_find_me_some(self):
        r = route("find me some tacos")
        assert r.args["query"] == "tacos"


class TestCorpusRouting:
    def test_whats_happening(self):
        r = route("What's happening this weekend?")
        assert r.tool == ToolName.LOOK_UP_SEATTLE_INFO
        assert r.args["query"] == "What's happening this weekend"

    def test_tell_me_about(self):
        r = route("tell me about Capitol Hill")
        assert r.tool == ToolName.LOOK_UP_SEATTLE_INFO


class TestNoMatch:
    def test_unrelated(self):
        assert route("Write me a haiku about the ocean") is None

    def test_general_question(self):
        assert route("What is the capital of France?") is None

    def test_empty(self):
        assert route("") is None
        assert route("   ") is None

    def test_none(self):
        assert route(None) is None
