"""Tests for the interceptor pipeline and stock interceptors."""

import logging

import httpx
import pytest

from declarest.interceptors import (
    BearerTokenInterceptor,
    HeaderInterceptor,
    HttpInterceptor,
    InterceptorPipeline,
    LoggingInterceptor,
)
from declarest.request import RequestDescriptor


def make_request():
    return RequestDescriptor(method="GET", url="/api/users", extensions={"counter": 0, "trail": ""})


class Counter(HttpInterceptor):
    def on_request(self, request):
        request.extensions["counter"] += 1
        return request


class Trail(HttpInterceptor):
    def __init__(self, mark):
        self.mark = mark

    def on_request(self, request):
        request.extensions["trail"] += self.mark
        return request

    def on_response(self, response):
        response.headers["X-Trail"] = response.headers.get("X-Trail", "") + self.mark
        return response


class ErrorOnly:
    """Duck-typed interceptor with a single hook."""

    def __init__(self, wrap):
        self.wrap = wrap

    def on_response_error(self, error):
        return self.wrap(error)


class TestInterceptorPipeline:
    """Tests for InterceptorPipeline folds."""

    def test_counter_fold(self):
        """Test every interceptor sees its predecessor's output."""
        pipeline = InterceptorPipeline([Counter(), Counter()])
        assert pipeline.apply_on_request(make_request()).extensions["counter"] == 2

    def test_order_is_left_to_right(self):
        """Test non-commutative mutations follow registration order."""
        ab = InterceptorPipeline([Trail("A"), Trail("B")])
        ba = InterceptorPipeline([Trail("B"), Trail("A")])

        assert ab.apply_on_request(make_request()).extensions["trail"] == "AB"
        assert ba.apply_on_request(make_request()).extensions["trail"] == "BA"

    def test_response_fold_order(self):
        """Test on_response also folds left to right."""
        pipeline = InterceptorPipeline([Trail("A"), Trail("B")])
        response = pipeline.apply_on_response(httpx.Response(200))
        assert response.headers["X-Trail"] == "AB"

    def test_replacement_request(self):
        """Test a hook may return a different descriptor."""

        class Rewrite:
            def on_request(self, request):
                return RequestDescriptor(method="POST", url="/other", extensions={"counter": 0})

        result = InterceptorPipeline([Rewrite(), Counter()]).apply_on_request(make_request())
        assert result.method == "POST"
        assert result.url == "/other"
        assert result.extensions == {"counter": 1}

    def test_none_result_keeps_value(self):
        """Test a hook returning None leaves the value unchanged."""

        class Observer:
            def on_request(self, request):
                request.extensions["seen"] = True

        request = make_request()
        assert InterceptorPipeline([Observer()]).apply_on_request(request) is request
        assert request.extensions["seen"] is True

    def test_missing_hooks_are_skipped(self):
        """Test interceptors without a hook do not take part in that fold."""
        pipeline = InterceptorPipeline([ErrorOnly(lambda e: e), Counter()])
        assert pipeline.apply_on_request(make_request()).extensions["counter"] == 1
        response = httpx.Response(204)
        assert pipeline.apply_on_response(response) is response

    def test_error_fold_replaces_error(self):
        """Test error hooks can enrich or replace the error."""
        pipeline = InterceptorPipeline([
            ErrorOnly(lambda e: RuntimeError(f"wrapped: {e}")),
            ErrorOnly(lambda e: KeyError(str(e))),
        ])
        result = pipeline.apply_on_response_error(ValueError("boom"))
        assert isinstance(result, KeyError)
        assert "wrapped: boom" in str(result)

    def test_error_fold_cannot_return_success(self):
        """Test an error hook cannot turn a failure into a value."""
        pipeline = InterceptorPipeline([ErrorOnly(lambda e: httpx.Response(200))])
        with pytest.raises(TypeError, match="must return an exception"):
            pipeline.apply_on_response_error(ValueError("boom"))

    def test_async_hook_rejected(self):
        """Test coroutine hooks are rejected."""

        class AsyncHook:
            async def on_request(self, request):
                return request

        with pytest.raises(TypeError, match="must be synchronous"):
            InterceptorPipeline([AsyncHook()]).apply_on_request(make_request())

    def test_object_without_hooks_rejected(self):
        """Test objects defining no hook are refused at construction."""
        with pytest.raises(TypeError, match="defines none of"):
            InterceptorPipeline([object()])

    def test_chain_is_fixed(self):
        """Test the installed interceptors cannot be changed afterwards."""
        interceptors = [Counter()]
        pipeline = InterceptorPipeline(interceptors)
        interceptors.append(Counter())

        assert len(pipeline) == 1
        assert isinstance(pipeline.interceptors, tuple)


class TestStockInterceptors:
    """Tests for the bundled interceptors."""

    def test_header_interceptor_appends(self):
        """Test HeaderInterceptor appends without replacing."""
        request = make_request()
        request.headers["X-Tag"] = "original"
        HeaderInterceptor({"X-Tag": "added"}).on_request(request)
        assert request.headers.get_list("X-Tag") == ["original", "added"]

    def test_bearer_token_replaces_authorization(self):
        """Test BearerTokenInterceptor sets a single Authorization header."""
        request = make_request()
        request.headers["Authorization"] = "Basic old"
        BearerTokenInterceptor("secret").on_request(request)
        assert request.headers.get_list("Authorization") == ["Bearer secret"]

    def test_logging_interceptor(self, caplog):
        """Test LoggingInterceptor logs requests, responses and failures."""
        interceptor = LoggingInterceptor(level=logging.INFO)
        with caplog.at_level(logging.INFO, logger="declarest"):
            interceptor.on_request(make_request())
            interceptor.on_response(httpx.Response(201))
            error = ValueError("boom")
            assert interceptor.on_response_error(error) is error

        messages = [r.getMessage() for r in caplog.records]
        assert "--> GET /api/users" in messages
        assert "<-- 201 Created" in messages
        assert any("request failed: boom" in m for m in messages)
