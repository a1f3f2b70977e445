"""Tests for RSS parsing into FeedItems."""


class TestParseFeedItems:
    """Tests for parse_feed_items()."""

    def test_blank_input(self):
        from src.harvester.feed_parser import parse_feed_items

        assert parse_feed_items("") == []
        assert parse_feed_items("   \n") == []

    def test_unreadable_input(self):
        from src.harvester.feed_parser import parse_feed_items

        assert parse_feed_items("this is not a feed") == []

    def test_fields_extracted(self, acme_feed_xml):
        from src.harvester.feed_parser import parse_feed_items

        items = parse_feed_items(acme_feed_xml)

        assert len(items) == 1
        item = items[0]
        assert item.title.startswith("Acme Ventures backs BrightGrid")
        assert item.link == "https://news.example.com/brightgrid"
        assert item.publish_time.endswith("GMT")
        assert item.description == "The round closed this week."
        assert item.source_name == "Example News"

    def test_feed_order_preserved(self, feed_builder):
        from src.harvester.feed_parser import parse_feed_items

        build_rss, _ = feed_builder
        xml = build_rss([
            (f"Headline {i}", f"https://example.com/{i}", "Sun, 01 Mar 2026 10:00:00 GMT", "", "Wire")
            for i in range(5)
        ])

        titles = [item.title for item in parse_feed_items(xml)]

        assert titles == [f"Headline {i}" for i in range(5)]

    def test_missing_elements_become_empty(self):
        from src.harvester.feed_parser import parse_feed_items

        xml = (
            '<?xml version="1.0"?><rss version="2.0"><channel>'
            "<item><title>Only a title</title></item>"
            "</channel></rss>"
        )

        items = parse_feed_items(xml)

        assert len(items) == 1
        assert items[0].title == "Only a title"
        assert items[0].link == ""
        assert items[0].publish_time == ""
        assert items[0].description == ""
        assert items[0].source_name == ""

    def test_escaped_html_description_cleaned(self, feed_builder):
        from src.harvester.feed_parser import parse_feed_items

        build_rss, _ = feed_builder
        xml = build_rss([
            ("Title", "https://example.com/x", "Sun, 01 Mar 2026 10:00:00 GMT",
             "&lt;b&gt;Big&lt;/b&gt; news", "Wire"),
        ])

        items = parse_feed_items(xml)

        assert items[0].description == "Big news"
