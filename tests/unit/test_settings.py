import pytest
from pydantic import ValidationError

from hirenet.config import Settings


def test_extension_lists_are_normalized() -> None:
    settings = Settings(resume_extensions=" .PDF, .docx ,", image_extensions=".png")
    assert settings.resume_extension_list == [".pdf", ".docx"]
    assert settings.image_extension_list == [".png"]


def test_unknown_environment_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(app_env="qa")


def test_search_minimum_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        Settings(search_min_query_length=0)
