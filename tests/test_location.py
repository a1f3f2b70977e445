"""
Tests for location resolution.

Strategies run in order: "City, ST" -> "<City>-based" -> bare city keyword ->
firm HQ fallback. The fallback always yields a city and state.
"""


class TestGazetteer:

    def test_lookup_city_case_insensitive(self):
        from src.analyst.gazetteer import lookup_city

        point = lookup_city("san francisco", "ca")

        assert point is not None
        assert point.city == "San Francisco"
        assert point.lat == 37.7749

    def test_lookup_requires_matching_state(self):
        from src.analyst.gazetteer import lookup_city

        assert lookup_city("Portland", "ME") is None

    def test_longest_names_first(self):
        from src.analyst.gazetteer import CITIES_BY_NAME

        lengths = [len(p.city) for p in CITIES_BY_NAME]

        assert lengths == sorted(lengths, reverse=True)


class TestInferLocation:

    def test_city_state_match(self, acme_firm):
        from src.analyst.classifier import infer_location
        from src.analyst.schemas import ResolutionMethod

        result = infer_location("Startup based in Austin, TX raises $5M", acme_firm)

        assert (result.city, result.state) == ("Austin", "TX")
        assert result.method == ResolutionMethod.CITY_STATE_MATCH
        assert result.confidence_boost == 0.30

    def test_city_state_with_leading_capitalized_word(self, acme_firm):
        """Only the trailing words that form a known city are used."""
        from src.analyst.classifier import infer_location
        from src.analyst.schemas import ResolutionMethod

        result = infer_location("Investors Back San Francisco, CA startup", acme_firm)

        assert (result.city, result.state) == ("San Francisco", "CA")
        assert result.method == ResolutionMethod.CITY_STATE_MATCH

    def test_city_state_case_insensitive(self, acme_firm):
        from src.analyst.classifier import infer_location
        from src.analyst.schemas import ResolutionMethod

        result = infer_location("startup based in austin, tx raises", acme_firm)

        assert (result.city, result.state) == ("Austin", "TX")
        assert result.method == ResolutionMethod.CITY_STATE_MATCH
        assert result.confidence_boost == 0.30

    def test_based_phrase_case_insensitive(self, acme_firm):
        from src.analyst.classifier import infer_location
        from src.analyst.schemas import ResolutionMethod

        result = infer_location("a denver-based company raises $5M", acme_firm)

        assert (result.city, result.state) == ("Denver", "CO")
        assert result.method == ResolutionMethod.BASED_PHRASE

    def test_multi_word_city(self, acme_firm):
        from src.analyst.classifier import infer_location

        result = infer_location("Salt Lake City, UT fintech raises", acme_firm)

        assert (result.city, result.state) == ("Salt Lake City", "UT")

    def test_based_phrase(self, acme_firm):
        from src.analyst.classifier import infer_location
        from src.analyst.schemas import ResolutionMethod

        result = infer_location("A Denver-based company raises $5M", acme_firm)

        assert (result.city, result.state) == ("Denver", "CO")
        assert result.method == ResolutionMethod.BASED_PHRASE
        assert result.confidence_boost == 0.22

    def test_city_keyword(self, acme_firm):
        from src.analyst.classifier import infer_location
        from src.analyst.schemas import ResolutionMethod

        result = infer_location("startup expanding to chicago offices", acme_firm)

        assert (result.city, result.state) == ("Chicago", "IL")
        assert result.method == ResolutionMethod.CITY_KEYWORD
        assert result.confidence_boost == 0.18

    def test_hq_fallback_with_coordinates(self, acme_firm):
        from src.analyst.classifier import infer_location
        from src.analyst.schemas import ResolutionMethod

        result = infer_location("no place named here", acme_firm)

        assert (result.city, result.state) == ("Boston", "MA")
        assert result.lat is not None
        assert result.method == ResolutionMethod.VC_HQ_FALLBACK
        assert result.confidence_boost == 0.06

    def test_hq_fallback_without_coordinates(self, unknown_hq_firm):
        """An HQ outside the gazetteer still yields city/state, with null coordinates."""
        from src.analyst.classifier import infer_location

        result = infer_location("no place named here", unknown_hq_firm)

        assert (result.city, result.state) == ("Woodside", "CA")
        assert result.lat is None
        assert result.lon is None

    def test_unknown_city_state_falls_through(self, acme_firm):
        from src.analyst.classifier import infer_location
        from src.analyst.schemas import ResolutionMethod

        result = infer_location("Springfield, IL startup raises", acme_firm)

        assert result.method == ResolutionMethod.VC_HQ_FALLBACK
