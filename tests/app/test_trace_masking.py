from __future__ import annotations

from fastapi import FastAPI, File, Request, UploadFile
from fastapi.responses import JSONResponse
from fastapi.testclient import TestClient

from ossgate.common.config import get_settings
from ossgate.infra.observability.middleware import MetricsMiddleware


def build_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(MetricsMiddleware)

    @app.post("/echo")
    async def echo(request: Request):
        body = await request.json()
        # 回传一个包含敏感字段的响应
        return JSONResponse(
            {
                "ok": True,
                "accessKeySecret": body.get("accessKeySecret"),
                "signed_url": "https://s3/b/k?X-Amz-Signature=abc",
            }
        )

    @app.post("/upload")
    async def upload(file: UploadFile = File(...)):
        return {"size": len(await file.read())}

    return app


def _http_records(caplog):
    return [
        rec
        for rec in caplog.records
        if rec.name == "http" and rec.getMessage().startswith("request ")
    ]


def test_trace_masking_masks_sensitive_fields(caplog, monkeypatch):
    monkeypatch.setenv("TRACE_HTTP", "true")
    get_settings.cache_clear()  # type: ignore[attr-defined]

    client = TestClient(build_app())

    with caplog.at_level("INFO"):
        r = client.post("/echo", json={"accessKeyId": "AKIA", "accessKeySecret": "s3cr3t"})
        assert r.status_code == 200

    records = _http_records(caplog)
    assert records, "should capture http logs"
    rec = records[-1]
    # 结构化字段挂载在 record.extra 上
    request_body = rec.extra.get("request_body") or ""
    response_body = rec.extra.get("response_body") or ""
    assert "s3cr3t" not in request_body and "AKIA" not in request_body
    assert "***" in request_body
    assert "s3cr3t" not in response_body
    assert "X-Amz-Signature" not in response_body


def test_trace_skips_binary_uploads(caplog, monkeypatch):
    monkeypatch.setenv("TRACE_HTTP", "true")
    get_settings.cache_clear()  # type: ignore[attr-defined]

    client = TestClient(build_app())

    with caplog.at_level("INFO"):
        r = client.post("/upload", files={"file": ("a.bin", b"\x00\x01secret", "application/octet-stream")})
        assert r.status_code == 200
        assert r.json() == {"size": 8}

    rec = _http_records(caplog)[-1]
    assert rec.extra["request_body"] is None
    assert rec.extra["response_body"] == '{"size": 8}'
