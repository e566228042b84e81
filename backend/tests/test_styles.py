"""Tests for parody.services.styles."""

import pytest

from parody.models.content import ImageContext
from parody.models.parody import ParodyStyle
from parody.services.styles import PARODY_STYLES, get_style, list_styles


class TestStyleRegistry:
    def test_every_style_registered(self):
        assert set(PARODY_STYLES) == set(ParodyStyle)

    def test_lookup_by_string(self):
        assert get_style("gen-z-brainrot").key == ParodyStyle.GEN_Z_BRAINROT

    def test_unknown_style(self):
        with pytest.raises(ValueError, match="Unknown parody style"):
            get_style("pirate")

    def test_every_style_has_prompts_for_every_context(self):
        for profile in PARODY_STYLES.values():
            for context in ImageContext:
                assert profile.image_prompt(context)

    def test_list_styles(self):
        keys = [info.key.value for info in list_styles()]
        assert keys == [
            "corporate-buzzword",
            "gen-z-brainrot",
            "medieval",
            "infomercial",
            "conspiracy",
            "simpsons",
        ]
