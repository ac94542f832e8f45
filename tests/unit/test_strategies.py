"""Unit tests for the built-in response strategies."""

from types import SimpleNamespace

from content_negotiation.responder import (
    RESPOND_WITH_STRATEGIES,
    USE_DEFAULT,
    ApiStrategy,
    FunctionStrategy,
    HtmlStrategy,
    Responder,
)
from content_negotiation.responder.strategies import as_strategy, content_errors


def _html_opts(**kwargs):
    opts = {"format": "html", "content_type": "text/html"}
    opts.update(kwargs)
    return opts


def test_respond_with_table_covers_builtin_formats():
    assert set(RESPOND_WITH_STRATEGIES) == {"html", "json", "xml", "js", "txt"}
    assert isinstance(RESPOND_WITH_STRATEGIES["html"], HtmlStrategy)
    assert isinstance(RESPOND_WITH_STRATEGIES["json"], ApiStrategy)


def test_as_strategy():
    assert as_strategy(None) is None
    assert as_strategy(USE_DEFAULT) is None
    assert as_strategy("not callable") is None
    api = ApiStrategy()
    assert as_strategy(api) is api
    assert isinstance(as_strategy(lambda *args: None), FunctionStrategy)


def test_content_errors_from_mapping_and_attribute():
    assert content_errors({"errors": {"name": "required"}}) == {"name": "required"}
    assert content_errors(SimpleNamespace(errors=["bad"])) == ["bad"]
    assert content_errors({"errors": {}}) is None
    assert content_errors([{"errors": "ignored"}]) is None


def test_api_strategy_errors_respond_400(make_context, formatter, writer):
    responder = Responder(make_context(), formatter)
    opts = {"format": "json", "content_type": "application/json", "type": "widget"}
    ApiStrategy().handle(responder, {"errors": {"name": "required"}}, opts)

    assert formatter.calls[0][1] == {"errors": {"name": "required"}}
    assert writer.responses[0][0] == 400


def test_api_strategy_wraps_by_type(make_context, formatter):
    responder = Responder(make_context(), formatter)
    opts = {"format": "json", "content_type": "application/json"}
    ApiStrategy().handle(responder, {"id": 1}, dict(opts, type="widget"))
    ApiStrategy().handle(responder, ({"id": 1},), dict(opts, type="widget"))
    ApiStrategy().handle(responder, {"id": 1}, dict(opts))

    assert [call[1] for call in formatter.calls] == [
        {"widget": {"id": 1}},
        {"widgets": [{"id": 1}]},
        {"id": 1},
    ]


def test_html_strategy_flashes_and_renders(make_context, formatter, writer):
    flashes = []
    ctx = make_context(flash=lambda message, kind: flashes.append((kind, message)))
    HtmlStrategy().handle(Responder(ctx, formatter), {"id": 1}, _html_opts(status="Saved"))

    assert flashes == [("success", "Saved")]
    assert writer.responses[0][0] == 200


def test_html_strategy_silent_skips_flash(make_context, formatter):
    flashes = []
    ctx = make_context(flash=lambda message, kind: flashes.append((kind, message)))
    opts = _html_opts(status="Saved", silent=True)
    HtmlStrategy().handle(Responder(ctx, formatter), {"id": 1}, opts)
    assert flashes == []


def test_html_strategy_errors_flash_error_and_400(make_context, formatter, writer):
    flashes, redirects = [], []
    ctx = make_context(
        flash=lambda message, kind: flashes.append((kind, message)),
        redirect=lambda url: redirects.append(url),
    )
    content = {"errors": {"name": "required"}}
    opts = _html_opts(status="Could not save", location="/widgets/1")
    HtmlStrategy().handle(Responder(ctx, formatter), content, opts)

    assert flashes == [("error", "Could not save")]
    assert redirects == []
    assert writer.responses[0][0] == 400


def test_html_strategy_redirects_to_location(make_context, formatter, writer):
    redirects = []
    ctx = make_context(redirect=lambda url: redirects.append(url))
    opts = _html_opts(location="/widgets/1")
    HtmlStrategy().handle(Responder(ctx, formatter), {"id": 1}, opts)

    assert redirects == ["/widgets/1"]
    assert formatter.calls == []
    assert writer.responses == []


def test_html_strategy_redirect_calls_callback_once(make_context, formatter):
    done = []
    ctx = make_context(redirect=lambda url: None)
    opts = _html_opts(location="/widgets/1")
    HtmlStrategy().handle(Responder(ctx, formatter), {"id": 1}, opts, done.append)

    assert done == [None]


def test_html_strategy_render_calls_callback_once(make_context, formatter):
    done = []
    responder = Responder(make_context(), formatter)
    HtmlStrategy().handle(responder, {"id": 1}, _html_opts(), done.append)

    assert len(done) == 1
