#!/usr/bin/env python3
"""Tests for episode accumulation and description coalescing."""

import unittest

from podfeed.episode import EpisodeBuilder
from podfeed.models import Episode


class TestEpisodeBuilder(unittest.TestCase):
    """Tests for EpisodeBuilder."""

    def test_summary_wins_over_description(self):
        builder = EpisodeBuilder()
        builder.fields["description"] = {"primary": "<p>Summary</p>", "alternate": "Other"}
        episode = builder.build()
        self.assertIsInstance(episode, Episode)
        self.assertEqual(episode.description, "<p>Summary</p>")
        self.assertEqual(episode.raw_description, "Summary")

    def test_falls_back_to_plain_description(self):
        builder = EpisodeBuilder()
        builder.fields["description"] = {"alternate": "<b>Only</b> this"}
        episode = builder.build()
        self.assertEqual(episode.description, "<b>Only</b> this")
        self.assertEqual(episode.raw_description, "Only this")

    def test_no_description_is_empty_string(self):
        episode = EpisodeBuilder().build()
        self.assertEqual(episode.description, "")
        self.assertEqual(episode.raw_description, "")

    def test_build_does_not_mutate_fields(self):
        builder = EpisodeBuilder()
        builder.fields["description"] = {"alternate": "Text"}
        builder.build()
        self.assertEqual(builder.fields["description"], {"alternate": "Text"})

    def test_image_from_href(self):
        builder = EpisodeBuilder()
        builder.set_image({"href": "https://example.com/ep.jpg"})
        self.assertEqual(builder.build().image, "https://example.com/ep.jpg")

    def test_image_without_href_left_unset(self):
        builder = EpisodeBuilder()
        builder.set_image({})
        self.assertNotIn("image", builder.build().to_dict())

    def test_enclosure(self):
        builder = EpisodeBuilder()
        builder.set_enclosure(
            {"length": "8727310", "type": "audio/x-m4a", "url": "https://example.com/a.m4a"}
        )
        enclosure = builder.build().enclosure
        self.assertEqual(enclosure.filesize, 8727310)
        self.assertEqual(enclosure.type, "audio/x-m4a")
        self.assertEqual(enclosure.url, "https://example.com/a.m4a")

    def test_enclosure_without_length_keeps_filesize_unknown(self):
        builder = EpisodeBuilder()
        builder.set_enclosure({"type": "audio/mpeg", "url": "https://example.com/a.mp3"})
        data = builder.build().to_dict()
        self.assertIn("filesize", data["enclosure"])
        self.assertIsNone(data["enclosure"]["filesize"])

    def test_enclosure_unparseable_length_is_not_zero(self):
        builder = EpisodeBuilder()
        builder.set_enclosure({"length": "unknown", "url": "https://example.com/a.mp3"})
        self.assertIsNone(builder.build().enclosure.filesize)

    def test_categories_keep_duplicates_and_order(self):
        builder = EpisodeBuilder()
        for text in ("Episodes", "JavaScript", "Episodes"):
            builder.add_category(text)
        self.assertEqual(builder.build().categories, ["Episodes", "JavaScript", "Episodes"])

    def test_serialized_names(self):
        builder = EpisodeBuilder()
        builder.fields["episode_type"] = "full"
        data = builder.build().to_dict()
        self.assertEqual(data["episodeType"], "full")
        self.assertIn("rawDescription", data)


if __name__ == "__main__":
    unittest.main()
