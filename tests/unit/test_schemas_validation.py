"""Unit tests for Pydantic schema validation."""

import pytest
from pydantic import ValidationError

from print_finder.types import ErrorResponse, HealthResponse, SearchResult, SearchSource


def valid_fields(**overrides) -> dict:
    fields = {
        "title": "3DBenchy",
        "url": "https://www.printables.com/model/3161-3dbenchy",
        "image_url": "https://media.printables.com/media/prints/3161/images/256",
        "source": SearchSource.PRINTABLES,
        "author": "CreativeTools",
    }
    fields.update(overrides)
    return fields


class TestSearchResult:
    """Tests for SearchResult schema."""

    def test_valid_search_result(self):
        result = SearchResult(**valid_fields())

        assert result.title == "3DBenchy"
        assert result.source is SearchSource.PRINTABLES

    def test_serializes_with_camel_case_image_url(self):
        dumped = SearchResult(**valid_fields()).model_dump(mode="json", by_alias=True)

        assert dumped == {
            "title": "3DBenchy",
            "url": "https://www.printables.com/model/3161-3dbenchy",
            "imageUrl": "https://media.printables.com/media/prints/3161/images/256",
            "source": "Printables",
            "author": "CreativeTools",
        }

    def test_accepts_alias_on_input(self):
        fields = valid_fields()
        fields["imageUrl"] = fields.pop("image_url")

        assert SearchResult(**fields).image_url.endswith("/256")

    @pytest.mark.parametrize("field", ["title", "url", "image_url"])
    @pytest.mark.parametrize("value", ["", "   "])
    def test_required_fields_must_be_non_empty(self, field: str, value: str):
        with pytest.raises(ValidationError):
            SearchResult(**valid_fields(**{field: value}))

    def test_author_defaults_to_empty(self):
        fields = valid_fields()
        del fields["author"]

        assert SearchResult(**fields).author == ""

    def test_source_accepts_label_string(self):
        assert SearchResult(**valid_fields(source="Makerworld")).source is SearchSource.MAKERWORLD

    def test_unknown_source_fails(self):
        with pytest.raises(ValidationError):
            SearchResult(**valid_fields(source="Cults3D"))

    def test_is_immutable(self):
        result = SearchResult(**valid_fields())

        with pytest.raises(ValidationError):
            result.title = "changed"

    def test_structural_equality(self):
        assert SearchResult(**valid_fields()) == SearchResult(**valid_fields())
        assert SearchResult(**valid_fields()) != SearchResult(**valid_fields(author="other"))


class TestApiSchemas:
    """Tests for the API response schemas."""

    def test_error_response(self):
        assert ErrorResponse(error="nope").model_dump() == {"error": "nope"}

    def test_health_defaults(self):
        health = HealthResponse()

        assert health.status == "ok"
        assert health.version


class TestSearchSource:
    def test_members_behave_as_plain_strings(self):
        assert SearchSource.THINGIVERSE == "Thingiverse"
        assert str(SearchSource.THINGIVERSE) == "Thingiverse"
        assert f"{SearchSource.MAKERWORLD}" == "Makerworld"
