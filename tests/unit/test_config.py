from src.config import AppConfig, TopicIcon


class TestTopicIcon:
    def test_known_titles(self):
        assert TopicIcon.get_icon("Mathematics") == "🔢"
        assert TopicIcon.get_icon("Marvel Super Heroes") == "🦸"
        assert TopicIcon.get_icon("Science") == "🔬"

    def test_lookup_ignores_case_and_punctuation(self):
        assert TopicIcon.get_icon("Science!") == "🔬"
        assert TopicIcon.get_icon("  mathematics ") == "🔢"

    def test_unknown_title_gets_default(self):
        assert TopicIcon.get_icon("Cooking") == AppConfig.DEFAULT_ICON

    def test_titles_are_unique(self):
        titles = [t.title for t in TopicIcon]
        assert len(titles) == len(set(titles))


class TestAppConfig:
    def test_band_thresholds_are_ordered(self):
        assert (
            0
            < AppConfig.FAIR_THRESHOLD
            < AppConfig.GOOD_THRESHOLD
            < AppConfig.EXCELLENT_THRESHOLD
            < 1
        )

    def test_default_source_is_http(self):
        assert AppConfig.DEFAULT_SOURCE_URL.startswith(("http://", "https://"))

    def test_timeout_is_positive(self):
        assert AppConfig.FETCH_TIMEOUT_SECONDS > 0
