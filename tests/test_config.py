"""Tests for framecompose.config value objects."""

import dataclasses

import pytest

from framecompose.config import (
    BlurSpec,
    CaptionSpec,
    FrameConfig,
    LogoSpec,
    ProcessorConfig,
    WatermarkSpec,
)
from framecompose.errors import InvalidConfig


class TestFrameConfig:
    def test_defaults_are_valid(self):
        frame = FrameConfig()
        assert frame.color == (255, 255, 255, 255)
        assert 1 <= frame.quality <= 100

    def test_is_frozen(self):
        frame = FrameConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            frame.padding = 3

    @pytest.mark.parametrize("quality", [0, 101, -5, 50.5, True])
    def test_quality_out_of_range(self, quality):
        with pytest.raises(InvalidConfig, match="quality"):
            FrameConfig(quality=quality)

    @pytest.mark.parametrize("quality", [1, 99, 100])
    def test_quality_bounds_accepted(self, quality):
        assert FrameConfig(quality=quality).quality == quality

    def test_negative_padding(self):
        with pytest.raises(InvalidConfig, match="padding"):
            FrameConfig(padding=-1)

    def test_negative_radius(self):
        with pytest.raises(InvalidConfig, match="corner_radius"):
            FrameConfig(corner_radius=-2)

    def test_bad_color(self):
        with pytest.raises(InvalidConfig, match="color"):
            FrameConfig(color=(255, 255, 255))

    def test_matte_defaults_to_black(self):
        assert FrameConfig().matte == (0, 0, 0)

    @pytest.mark.parametrize("matte", [(0, 0, 0, 255), (0, 0, 256), [0, 0, 0]])
    def test_bad_matte(self, matte):
        with pytest.raises(InvalidConfig, match="matte"):
            FrameConfig(matte=matte)

    def test_invalid_config_is_value_error(self):
        with pytest.raises(ValueError):
            FrameConfig(bottom_height=-1)


class TestSections:
    def test_caption_defaults(self):
        caption = CaptionSpec(text="AF 56/1.7 XF")
        assert caption.x_offset == 0
        assert caption.color == (0, 0, 0, 255)

    def test_caption_rejects_zero_size(self):
        with pytest.raises(InvalidConfig, match="size"):
            CaptionSpec(text="x", size=0)

    def test_caption_allows_negative_offsets(self):
        caption = CaptionSpec(text="x", x_offset=-10, y_offset=-4)
        assert (caption.x_offset, caption.y_offset) == (-10, -4)

    def test_logo_requires_positive_size(self):
        with pytest.raises(InvalidConfig, match="logo width"):
            LogoSpec(width=0, height=10)

    def test_blur_requires_positive_sigma(self):
        with pytest.raises(InvalidConfig, match="sigma"):
            BlurSpec(sigma=0)

    def test_blur_rejects_negative_padding(self):
        with pytest.raises(InvalidConfig, match="blur padding"):
            BlurSpec(sigma=2, padding=-1)

    def test_watermark_position_must_be_pair(self):
        with pytest.raises(InvalidConfig, match="position"):
            WatermarkSpec(text="x", position=(1, 2, 3))


class TestProcessorConfig:
    def test_all_sections_optional(self):
        config = ProcessorConfig()
        assert config.left_text is None
        assert config.right_text is None
        assert config.logo is None
        assert config.blur is None
        assert config.watermark is None
        assert config.font is None

    def test_each_instance_gets_own_frame(self):
        a = ProcessorConfig()
        b = ProcessorConfig(frame=FrameConfig(padding=5))
        assert a.frame.padding != b.frame.padding
