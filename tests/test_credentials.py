"""Tests for the credential provisioner (infra/credentials.py)."""

from __future__ import annotations

import base64
import logging
import stat
from pathlib import Path
from unittest.mock import patch

import pytest

from streamgrab.infra.credentials import CredentialProvisioner, decode_credential

NETSCAPE_COOKIES = (
    "# Netscape HTTP Cookie File\n"
    ".youtube.com\tTRUE\t/\tTRUE\t0\tPREF\tf6=40000000\n"
)


# ---------------------------------------------------------------------------
# decode_credential
# ---------------------------------------------------------------------------

class TestDecodeCredential:
    def test_valid_base64_is_decoded(self) -> None:
        encoded = base64.b64encode(NETSCAPE_COOKIES.encode()).decode()
        assert decode_credential(encoded) == NETSCAPE_COOKIES.encode()

    def test_plain_text_is_returned_verbatim(self) -> None:
        assert decode_credential(NETSCAPE_COOKIES) == NETSCAPE_COOKIES.encode()

    def test_line_wrapped_base64_is_decoded(self) -> None:
        payload = (NETSCAPE_COOKIES * 4).encode()
        wrapped = base64.encodebytes(payload).decode()
        assert "\n" in wrapped.rstrip("\n")
        assert decode_credential(wrapped) == payload

    def test_crlf_wrapped_base64_is_decoded(self) -> None:
        payload = (NETSCAPE_COOKIES * 4).encode()
        wrapped = base64.encodebytes(payload).decode().replace("\n", "\r\n")
        assert decode_credential(wrapped) == payload

    def test_embedded_space_still_falls_back(self) -> None:
        assert decode_credential("Zm9v YmFy") == b"Zm9v YmFy"

    def test_bad_padding_falls_back(self) -> None:
        assert decode_credential("abc") == b"abc"

    def test_fallback_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="streamgrab.infra.credentials"):
            decode_credential("not base64 at all!")
        assert "Failed to decode" in caplog.text


# ---------------------------------------------------------------------------
# CredentialProvisioner.provision
# ---------------------------------------------------------------------------

class TestProvision:
    def test_empty_value_returns_none(self, tmp_path: Path) -> None:
        target = tmp_path / "cookies.txt"
        assert CredentialProvisioner(target).provision("") is None
        assert not target.exists()

    def test_none_value_returns_none(self, tmp_path: Path) -> None:
        assert CredentialProvisioner(tmp_path / "c.txt").provision(None) is None

    @pytest.mark.parametrize(
        "payload",
        [b"session=abc", NETSCAPE_COOKIES.encode(), bytes(range(256))],
    )
    def test_base64_contents_equal_decoded_bytes(
        self, tmp_path: Path, payload: bytes,
    ) -> None:
        target = tmp_path / "cookies.txt"
        result = CredentialProvisioner(target).provision(
            base64.b64encode(payload).decode(),
        )
        assert result == target
        assert target.read_bytes() == payload

    def test_wrapped_base64_contents_equal_decoded_bytes(self, tmp_path: Path) -> None:
        target = tmp_path / "cookies.txt"
        payload = (NETSCAPE_COOKIES * 4).encode()
        CredentialProvisioner(target).provision(base64.encodebytes(payload).decode())
        assert target.read_bytes() == payload

    def test_plain_text_contents_equal_input(self, tmp_path: Path) -> None:
        target = tmp_path / "cookies.txt"
        CredentialProvisioner(target).provision(NETSCAPE_COOKIES)
        assert target.read_text() == NETSCAPE_COOKIES

    def test_overwrites_existing_file(self, tmp_path: Path) -> None:
        target = tmp_path / "cookies.txt"
        target.write_text("stale")
        CredentialProvisioner(target).provision("fresh value")
        assert target.read_text() == "fresh value"

    def test_file_mode_is_0644(self, tmp_path: Path) -> None:
        target = tmp_path / "cookies.txt"
        CredentialProvisioner(target).provision("x=1; y=2")
        assert stat.S_IMODE(target.stat().st_mode) == 0o644

    def test_write_failure_degrades_to_none(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture,
    ) -> None:
        target = tmp_path / "missing-dir" / "cookies.txt"
        with caplog.at_level(logging.ERROR, logger="streamgrab.infra.credentials"):
            assert CredentialProvisioner(target).provision("x=1") is None
        assert "Error writing" in caplog.text

    def test_permission_error_degrades_to_none(self, tmp_path: Path) -> None:
        target = tmp_path / "cookies.txt"
        with patch.object(Path, "write_bytes", side_effect=PermissionError("denied")):
            assert CredentialProvisioner(target).provision("x=1") is None
