# tests/core/render/test_render_base.py
"""
core/render/base.py 단위 테스트
"""

from dataclasses import dataclass

import pytest

from core.dao import BaseResource, wrap_with_region
from core.render import BaseRenderer, Column, Renderer, SummaryField, truncate


@dataclass(frozen=True)
class VolumeResource(BaseResource):
    size: int = 0

    def extra_fields(self):
        return {"Size": f"{self.size} GiB"}


class VolumeRenderer(BaseRenderer):
    def __init__(self):
        super().__init__(
            "ec2",
            "volumes",
            [
                Column("ID", 22, lambda r: r.id),
                Column("SIZE", 6, lambda r: str(r.size) if isinstance(r, VolumeResource) else "", priority=1),
            ],
        )


@pytest.fixture
def volume():
    return VolumeResource(
        id="vol-1",
        name="data",
        arn="arn:aws:ec2:us-east-1:123456789012:volume/vol-1",
        tags={"Team": "core", "Env": "prod"},
        size=100,
    )


class TestBaseRenderer:
    """BaseRenderer 테스트"""

    def test_identity(self):
        """service/resource/columns"""
        renderer = VolumeRenderer()
        assert isinstance(renderer, Renderer)
        assert renderer.service == "ec2"
        assert renderer.resource == "volumes"
        assert [c.name for c in renderer.columns()] == ["ID", "SIZE"]

    def test_row(self, volume):
        """행 생성"""
        assert VolumeRenderer().row(volume) == ["vol-1", "100"]

    def test_row_unwraps_regional(self, volume):
        """리전 래핑된 리소스도 구체 타입으로 getter 호출"""
        row = VolumeRenderer().row(wrap_with_region(volume, "eu-west-1"))
        assert row == ["vol-1", "100"]

    def test_summary(self, volume):
        """요약 필드"""
        fields = VolumeRenderer().render_summary(volume)
        assert fields[0] == SummaryField("ID", "vol-1")
        assert SummaryField("Name", "data") in fields
        assert all(f.label != "Region" for f in fields)

    def test_summary_region(self, volume):
        """래핑된 리소스는 Region 포함"""
        fields = VolumeRenderer().render_summary(wrap_with_region(volume, "eu-west-1"))
        assert SummaryField("Region", "eu-west-1") in fields

    def test_summary_without_arn(self):
        """ARN이 없으면 생략"""
        fields = VolumeRenderer().render_summary(BaseResource(id="x"))
        assert [f.label for f in fields] == ["ID", "Name"]

    def test_detail(self, volume):
        """상세: 요약 + 추가 필드 + 정렬된 태그"""
        detail = VolumeRenderer().render_detail(volume)
        lines = detail.splitlines()

        assert "ID: vol-1" in lines
        assert "Size: 100 GiB" in lines
        assert lines.index("  Env = prod") < lines.index("  Team = core")


class TestTruncate:
    """truncate 테스트"""

    def test_short(self):
        """너비 이하면 그대로"""
        assert truncate("abc", 5) == "abc"

    def test_long(self):
        """너비 초과 시 말줄임"""
        assert truncate("abcdefgh", 6) == "abc..."

    def test_tiny_width(self):
        """너비가 너무 작으면 그대로"""
        assert truncate("abcdefgh", 3) == "abcdefgh"
