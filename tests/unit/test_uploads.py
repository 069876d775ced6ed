import io

import pytest
from fastapi import HTTPException, UploadFile

from hirenet.core.uploads import UploadPolicy, check_extension, store_upload


def _policy(max_bytes: int = 1024) -> UploadPolicy:
    return UploadPolicy("resume", (".pdf", ".doc", ".docx"), max_bytes)


def test_policy_descriptions() -> None:
    policy = UploadPolicy("resume", (".pdf", ".doc", ".docx"), 5 * 1024 * 1024)
    assert policy.describe_extensions() == "PDF, DOC, and DOCX"
    assert policy.describe_size() == "5MB"


def test_extension_check_is_case_insensitive() -> None:
    assert check_extension("CV.PDF", _policy()) == ".pdf"


@pytest.mark.parametrize("filename", ["cv.exe", "cv", "cv.pdf.sh"])
def test_disallowed_extension_names_allowed_types(filename: str) -> None:
    with pytest.raises(HTTPException) as exc_info:
        check_extension(filename, _policy())
    assert exc_info.value.status_code == 400
    assert "PDF, DOC, and DOCX" in exc_info.value.detail


def test_oversize_upload_rejected_without_writing(tmp_path) -> None:
    upload = UploadFile(file=io.BytesIO(b"x" * 2048), filename="cv.pdf")
    with pytest.raises(HTTPException) as exc_info:
        store_upload(upload, _policy(max_bytes=1024), tmp_path)
    assert exc_info.value.status_code == 400
    assert "too large" in exc_info.value.detail
    assert list(tmp_path.iterdir()) == []


def test_accepted_upload_written_under_generated_name(tmp_path) -> None:
    upload = UploadFile(file=io.BytesIO(b"%PDF-1.4 resume"), filename="My CV.pdf")
    url = store_upload(upload, _policy(), tmp_path / "uploads")
    assert url.startswith("/uploads/resume-")
    assert url.endswith(".pdf")
    stored = tmp_path / "uploads" / url.rsplit("/", 1)[1]
    assert stored.read_bytes() == b"%PDF-1.4 resume"
