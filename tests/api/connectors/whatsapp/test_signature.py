"""Testes da validação X-Hub-Signature-256."""

from __future__ import annotations

from api.connectors.whatsapp.signature import compute_signature, verify_meta_signature

BODY = b'{"entry": []}'
SECRET = "app-secret"


class TestVerifyMetaSignature:
    def test_valid_signature(self) -> None:
        headers = {"X-Hub-Signature-256": compute_signature(BODY, SECRET)}
        result = verify_meta_signature(BODY, headers, SECRET)
        assert result.valid is True
        assert result.skipped is False

    def test_skipped_without_secret(self) -> None:
        result = verify_meta_signature(BODY, {}, "")
        assert result.valid is True
        assert result.skipped is True

    def test_missing_header(self) -> None:
        result = verify_meta_signature(BODY, {}, SECRET)
        assert result.valid is False
        assert result.error == "missing_signature"

    def test_malformed_header(self) -> None:
        result = verify_meta_signature(BODY, {"x-hub-signature-256": "md5=abc"}, SECRET)
        assert result.error == "malformed_signature"

    def test_tampered_body(self) -> None:
        headers = {"x-hub-signature-256": compute_signature(BODY, SECRET)}
        result = verify_meta_signature(b'{"entry": [1]}', headers, SECRET)
        assert result.valid is False
        assert result.error == "signature_mismatch"
