"""役職カテゴリ分類のテスト."""

import pytest

from src.domain.services.speaker_role_classifier import (
    SpeakerRole,
    default_role_for_category,
    to_speaker_role,
)
from src.domain.value_objects.attendee import AttendeeCategory


class TestToSpeakerRole:
    """to_speaker_role のテスト."""

    @pytest.mark.parametrize(
        ("role", "expected"),
        [
            ("議員", SpeakerRole.COUNCILOR),
            ("市長", SpeakerRole.MAYOR),
            ("副市長", SpeakerRole.EXECUTIVE),
            ("教育長", SpeakerRole.EXECUTIVE),
            ("議長", SpeakerRole.CHAIR),
            ("副議長", SpeakerRole.CHAIR),
            ("委員長", SpeakerRole.CHAIR),
            ("副委員長", SpeakerRole.CHAIR),
            ("予算決算常任委員長", SpeakerRole.CHAIR),
            ("総務部長", SpeakerRole.STAFF),
            ("財政課長", SpeakerRole.STAFF),
            ("農業委員会事務局長", SpeakerRole.STAFF),
            ("教育次長", SpeakerRole.STAFF),
            ("参事", SpeakerRole.STAFF),
            ("監査委員", SpeakerRole.STAFF),
            ("危機管理監", SpeakerRole.STAFF),
            ("委員", SpeakerRole.UNKNOWN),
            ("", SpeakerRole.UNKNOWN),
            (None, SpeakerRole.UNKNOWN),
        ],
    )
    def test_classify(self, role: str | None, expected: SpeakerRole) -> None:
        assert to_speaker_role(role) is expected


class TestDefaultRoleForCategory:
    @pytest.mark.parametrize(
        ("category", "expected"),
        [
            (AttendeeCategory.COUNCILOR, SpeakerRole.COUNCILOR),
            (AttendeeCategory.EXECUTIVE, SpeakerRole.EXECUTIVE),
            (AttendeeCategory.STAFF, SpeakerRole.STAFF),
        ],
    )
    def test_default(self, category: AttendeeCategory, expected: SpeakerRole) -> None:
        assert default_role_for_category(category) is expected
