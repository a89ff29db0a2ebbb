"""
Tests for resume validation and encoding.
"""

import base64

import pytest
from fastapi import HTTPException

from app.utils.file_upload import encode_resume, get_file_extension

MB = 1024 * 1024


class TestGetFileExtension:

    def test_lowercased(self):
        assert get_file_extension("CV.PDF") == ".pdf"
        assert get_file_extension("my.resume.docx") == ".docx"

    def test_no_extension(self):
        assert get_file_extension("resume") == ""


class TestEncodeResume:

    def test_pdf_encoded(self):
        encoded = encode_resume("cv.pdf", b"%PDF-1.4", 5 * MB)

        assert encoded.file_type == "application/pdf"
        assert encoded.size == 8
        assert base64.b64decode(encoded.base64_data) == b"%PDF-1.4"

    @pytest.mark.parametrize("filename", ["", "cv.exe", "cv"])
    def test_rejected_names(self, filename):
        with pytest.raises(HTTPException) as exc:
            encode_resume(filename, b"data", 5 * MB)
        assert exc.value.status_code == 400

    def test_empty_file(self):
        with pytest.raises(HTTPException) as exc:
            encode_resume("cv.doc", b"", 5 * MB)
        assert exc.value.status_code == 400

    def test_too_large(self):
        with pytest.raises(HTTPException) as exc:
            encode_resume("cv.docx", b"x" * (MB + 1), MB)
        assert exc.value.status_code == 413
