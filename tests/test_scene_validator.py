"""
Tests for post-parse validation.

Run with: pytest tests/test_scene_validator.py -v
"""
import pytest

from models import Scene, SceneHeader
from parse_errors import NoScenesError
from parser_config import ParserConfig
from scene_validator import has_analyzable_content, validate_scenes


def make_scene(number, content, index=0):
    return Scene(
        number=number,
        header=f"INT. ROOM {number} - DAY",
        header_parsed=SceneHeader(
            raw=f"INT. ROOM {number} - DAY",
            scene_number=number,
            int_ext="INT",
            location=f"ROOM {number}",
            time_of_day="DAY"
        ),
        content=content,
        index=index
    )


@pytest.fixture
def config():
    return ParserConfig()


class TestContentFloor:

    def test_two_chars_dropped_twelve_kept(self, config):
        scenes = [
            make_scene(1, "ok", 0),
            make_scene(2, "Twelve chars", 1),
            make_scene(3, "Plenty of content here.", 2),
        ]
        report = validate_scenes(scenes, config)
        assert [s.number for s in report.scenes] == [2, 3]
        dropped = [w for w in report.warnings if w.code == "SHORT_SCENE_DROPPED"]
        assert len(dropped) == 1
        assert dropped[0].scene_number == 1

    def test_indices_reassigned(self, config):
        scenes = [make_scene(1, "ok", 0), make_scene(2, "Twelve chars", 1)]
        report = validate_scenes(scenes, config)
        assert report.scenes[0].index == 0

    def test_whitespace_does_not_count(self):
        assert not has_analyzable_content("   ok      ")
        assert has_analyzable_content("0123456789")

    def test_nothing_left_is_fatal(self, config):
        with pytest.raises(NoScenesError):
            validate_scenes([make_scene(1, ""), make_scene(2, "short")], config)

    def test_empty_input_is_fatal(self, config):
        with pytest.raises(NoScenesError):
            validate_scenes([], config)


class TestAdvisories:

    def test_low_scene_count(self, config):
        report = validate_scenes([make_scene(1, "Plenty of content here.")], config)
        assert [w.code for w in report.warnings] == ["LOW_SCENE_COUNT"]

    def test_enough_scenes_no_warning(self, config):
        scenes = [make_scene(i, "Plenty of content here.", i) for i in range(1, 4)]
        assert validate_scenes(scenes, config).warnings == []

    def test_duplicates_warned_not_corrected(self, config):
        scenes = [
            make_scene(5, "Plenty of content here.", 0),
            make_scene(5, "Different content here.", 1),
            make_scene(6, "More content over here.", 2),
        ]
        report = validate_scenes(scenes, config)
        assert [s.number for s in report.scenes] == [5, 5, 6]
        assert len(report.warnings) == 1
        assert report.warnings[0].code == "DUPLICATE_SCENE_NUMBER"

    def test_thresholds_from_config(self):
        config = ParserConfig(min_scene_content=2, low_scene_count=1)
        report = validate_scenes([make_scene(1, "ok")], config)
        assert len(report.scenes) == 1
        assert report.warnings == []
