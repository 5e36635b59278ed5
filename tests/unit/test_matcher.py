"""Unit tests for cross-file identity matching."""

from itertools import permutations
from pathlib import Path

import pytest
from conftest import audio, subtitle, video

from mkvsame.core.matcher import (
    common_identities,
    extract_identities,
    find_candidates,
    merge_identities,
)
from mkvsame.models.file import MediaFile
from mkvsame.models.track import Identity, LanguageKey, TrackType


def media(name, *tracks):
    return MediaFile(path=Path(name), tracks=list(tracks))


class TestExtractIdentities:
    """Test projecting tracks to identities."""

    def test_skips_undetermined_ietf(self, mixed_tracks):
        """Tracks with an undetermined IETF tag are dropped for IETF matching."""
        tracks = mixed_tracks[:2] + [subtitle(3, "ger", "und", "Track 3")]

        result = extract_identities(tracks, LanguageKey.IETF)

        assert result == [
            Identity("eng", "en", "Track 1"),
            Identity("fre", "fr", "Track 2"),
        ]

    def test_skips_undetermined_code(self, mixed_tracks):
        """Tracks with an undetermined short code are dropped for code matching."""
        tracks = mixed_tracks[:2] + [subtitle(3, "und", "ge", "Track 3")]

        result = extract_identities(tracks, LanguageKey.CODE)

        assert result == [
            Identity("eng", "en", "Track 1"),
            Identity("fre", "fr", "Track 2"),
        ]

    def test_undetermined_ietf_still_matches_by_code(self):
        """Only the selected representation is filtered."""
        tracks = [audio(0, "eng", "und")]

        assert extract_identities(tracks, LanguageKey.CODE) == [Identity("eng", "und")]
        assert extract_identities(tracks, LanguageKey.IETF) == []

    def test_keeps_duplicates(self):
        """Identical tracks are not merged."""
        tracks = [audio(0, "eng", "en"), audio(1, "eng", "en")]

        assert len(extract_identities(tracks, LanguageKey.CODE)) == 2


class TestCommonIdentities:
    """Test cross-file intersection."""

    def test_three_identical_files(self):
        """A track present everywhere is common."""
        files = [media(f"{n}.mkv", audio(0, "eng", "en")) for n in range(3)]

        result = common_identities(files, TrackType.AUDIO, LanguageKey.CODE)

        assert result == [Identity("eng", "en", None)]

    def test_partial_overlap(self):
        """Tracks missing from one file are dropped, order follows the first file."""
        files = [
            media(
                "a.mkv",
                audio(1, "eng", "en", "Track 1"),
                audio(2, "fre", "fr"),
                subtitle(3, "ger", "de", "Track 3"),
            ),
            media(
                "b.mkv",
                audio(1, "fre", "fr"),
                audio(2, "eng", "en", "Track 1"),
                subtitle(3, "spa", "es", "Track 3"),
            ),
        ]

        expected = [Identity("eng", "en", "Track 1"), Identity("fre", "fr", None)]
        assert common_identities(files, TrackType.AUDIO, LanguageKey.CODE) == expected
        assert common_identities(files, TrackType.AUDIO, LanguageKey.IETF) == expected
        assert common_identities(files, TrackType.SUBTITLES, LanguageKey.CODE) == []

    def test_name_must_match(self):
        """Same language with different names is not the same track."""
        files = [
            media("a.mkv", subtitle(0, "eng", "en", "Full")),
            media("b.mkv", subtitle(0, "eng", "en", "Signs")),
        ]

        assert common_identities(files, TrackType.SUBTITLES, LanguageKey.CODE) == []

    def test_all_fields_must_match(self):
        """A differing IETF tag breaks the match even when matching by code."""
        files = [
            media("a.mkv", audio(0, "eng", "en")),
            media("b.mkv", audio(0, "eng", "en-GB")),
        ]

        assert common_identities(files, TrackType.AUDIO, LanguageKey.CODE) == []

    def test_empty_batch(self):
        """No files means no common identities."""
        assert common_identities([], TrackType.AUDIO, LanguageKey.CODE) == []

    def test_empty_file_empties_result(self):
        """A file without qualifying tracks empties the result for good."""
        files = [
            media("a.mkv", audio(0, "eng", "en")),
            media("b.mkv", video(0)),
            media("c.mkv", audio(0, "eng", "en")),
        ]

        assert common_identities(files, TrackType.AUDIO, LanguageKey.CODE) == []

    def test_empty_first_file(self):
        """An empty first file is not skipped."""
        files = [
            media("a.mkv", audio(0, "und", "und")),
            media("b.mkv", audio(0, "eng", "en")),
        ]

        assert common_identities(files, TrackType.AUDIO, LanguageKey.CODE) == []

    def test_membership_independent_of_file_order(self):
        """Every permutation of the batch yields the same set."""
        files = [
            media("a.mkv", audio(0, "eng", "en"), audio(1, "jpn", "ja"), audio(2, "fre", "fr")),
            media("b.mkv", audio(0, "jpn", "ja"), audio(1, "eng", "en")),
            media("c.mkv", audio(0, "fre", "fr"), audio(1, "eng", "en"), audio(2, "jpn", "ja")),
        ]

        results = {
            frozenset(common_identities(list(order), TrackType.AUDIO, LanguageKey.CODE))
            for order in permutations(files)
        }

        assert results == {frozenset({Identity("eng", "en"), Identity("jpn", "ja")})}

    def test_idempotent(self):
        """Intersecting a file with itself keeps its identities."""
        single = media("a.mkv", audio(0, "eng", "en"), audio(1, "jpn", "ja"))

        once = common_identities([single], TrackType.AUDIO, LanguageKey.CODE)
        twice = common_identities([single, single], TrackType.AUDIO, LanguageKey.CODE)

        assert once == twice

    def test_does_not_alias_source(self):
        """The result is a fresh list."""
        files = [media("a.mkv", audio(0, "eng", "en"))]

        result = common_identities(files, TrackType.AUDIO, LanguageKey.CODE)
        result.clear()

        assert common_identities(files, TrackType.AUDIO, LanguageKey.CODE) == [Identity("eng", "en")]


class TestMergeIdentities:
    """Test the ordered union of both representations."""

    def test_same_sets(self):
        """Merging equal sets yields the set once."""
        identities = [Identity("eng", "en")]

        assert merge_identities(identities, identities) == identities

    @pytest.mark.parametrize(
        "identities",
        [
            [],
            [Identity("eng", "en")],
            [Identity("eng", "en", "Full"), Identity("eng", "en", "Signs"), Identity("ger", "de")],
        ],
    )
    def test_idempotent(self, identities):
        """No duplicates are introduced."""
        assert merge_identities(identities, identities) == identities

    def test_code_set_first(self):
        """Shared entries keep their short-code position, IETF-only entries follow."""
        by_code = [Identity("jpn", "und"), Identity("eng", "en")]
        by_ietf = [Identity("eng", "en"), Identity("und", "pt-BR"), Identity("und", "es-419")]

        assert merge_identities(by_code, by_ietf) == [
            Identity("jpn", "und"),
            Identity("eng", "en"),
            Identity("und", "pt-BR"),
            Identity("und", "es-419"),
        ]

    def test_one_side_empty(self):
        """An empty side contributes nothing."""
        identities = [Identity("eng", "en")]

        assert merge_identities([], identities) == identities
        assert merge_identities(identities, []) == identities


class TestFindCandidates:
    """Test combining both representations for a batch."""

    def test_episode_batch(self, episode_batch):
        """Identical files expose all their determined tracks."""
        assert find_candidates(episode_batch, TrackType.AUDIO) == [
            Identity("jpn", "ja"),
            Identity("eng", "en", "Dub"),
        ]
        assert find_candidates(episode_batch, TrackType.SUBTITLES) == [
            Identity("eng", "en", "Signs & Songs"),
            Identity("eng", "en", "Full"),
            Identity("ger", "de"),
        ]

    def test_ietf_only_and_code_only_tracks(self):
        """Tracks determined in only one representation are still offered."""
        files = [
            media("a.mkv", audio(0, "jpn", "und"), audio(1, "und", "pt-BR")),
            media("b.mkv", audio(0, "und", "pt-BR"), audio(1, "jpn", "und")),
        ]

        assert find_candidates(files, TrackType.AUDIO) == [
            Identity("jpn", "und"),
            Identity("und", "pt-BR"),
        ]
