"""Unit tests for format negotiation."""

import pytest

from content_negotiation.exceptions import UndefinedFormatError
from content_negotiation.models import (
    FailureReason,
    NegotiationFailure,
    NegotiationRequest,
    NegotiationResult,
)
from content_negotiation.utils.media import ContentTypeRegistry, Negotiator, merge_formats


@pytest.fixture
def negotiator():
    return Negotiator(ContentTypeRegistry())


def _req(**kwargs):
    kwargs.setdefault("allowed_formats", ["html", "json"])
    return NegotiationRequest(**kwargs)


def test_merge_formats_appends_without_duplicates():
    assert merge_formats(["html", "json"], ["json", "csv", "JSON"]) == [
        "html",
        "json",
        "csv",
        "JSON",
    ]


@pytest.mark.parametrize("accept", [None, "*/*", "*/*;q=0.8"])
def test_wildcard_or_missing_accept_picks_first_allowed(negotiator, accept):
    out = negotiator.negotiate(_req(accept_header=accept))
    assert out.ok
    assert out == NegotiationResult(format="html", content_type="text/html")


def test_requested_format_is_sole_candidate(negotiator):
    req = _req(requested_format="txt", param_format="json", accept_header="*/*")
    assert negotiator.candidates(req) == ["txt"]
    out = negotiator.negotiate(req)
    assert out.format == "txt"
    assert out.content_type == "text/plain"


def test_param_format_in_allowed_is_sole_candidate(negotiator):
    req = _req(param_format="json", accept_header="application/json")
    assert negotiator.candidates(req) == ["json"]
    assert negotiator.negotiate(req).format == "json"


def test_param_format_matches_extra_formats(negotiator):
    req = _req(param_format="xml", extra_formats=["xml"])
    assert negotiator.negotiate(req).format == "xml"


def test_param_format_not_allowed_fails(negotiator):
    req = _req(param_format="xml")
    assert negotiator.candidates(req) == []
    out = negotiator.negotiate(req)
    assert not out.ok
    assert out.reason == FailureReason.EMPTY_CANDIDATES
    with pytest.raises(UndefinedFormatError):
        out.unwrap()


def test_empty_allowed_formats_fail(negotiator):
    out = negotiator.negotiate(NegotiationRequest())
    assert isinstance(out, NegotiationFailure)
    assert out.reason == FailureReason.EMPTY_CANDIDATES


def test_empty_allowed_formats_with_extra_formats(negotiator):
    out = negotiator.negotiate(NegotiationRequest(extra_formats=["json"]))
    assert out.format == "json"


def test_first_unmatched_candidate_is_hard_failure(negotiator):
    out = negotiator.negotiate(_req(accept_header="application/json"))
    assert not out.ok
    assert out.reason == FailureReason.UNMATCHED_CANDIDATE
    assert out.format == "html"
    assert out.candidates == ["html", "json"]


def test_whitespace_only_accept_matches_nothing(negotiator):
    out = negotiator.negotiate(_req(accept_header="   "))
    assert not out.ok
    assert out.reason == FailureReason.UNMATCHED_CANDIDATE
    assert out.format == "html"


def test_wildcard_entry_short_circuits_to_first_candidate(negotiator):
    out = negotiator.negotiate(_req(accept_header="application/json, */*"))
    assert out.format == "html"
    assert out.content_type == "text/html"


def test_matching_first_candidate(negotiator):
    out = negotiator.negotiate(_req(accept_header="text/html;q=0.9, application/json"))
    assert out == NegotiationResult(format="html", content_type="text/html")


def test_wildcard_with_unknown_first_candidate_fails(negotiator):
    out = negotiator.negotiate(NegotiationRequest(allowed_formats=["yaml", "json"]))
    assert out.reason == FailureReason.UNRESOLVED_CONTENT_TYPE
    assert out.format == "yaml"


def test_requested_format_without_content_type_fails(negotiator):
    out = negotiator.negotiate(_req(requested_format="yaml"))
    assert out.reason == FailureReason.UNRESOLVED_CONTENT_TYPE


@pytest.mark.parametrize(
    "req",
    [
        _req(),
        _req(accept_header="text/*"),
        _req(param_format="json", accept_header="application/json"),
        _req(requested_format="xml", accept_header="text/xml"),
        _req(allowed_formats=["js"], accept_header="text/javascript"),
    ],
)
def test_result_content_type_resolves_from_format(negotiator, req):
    out = negotiator.negotiate(req)
    assert out.ok
    assert negotiator.registry.resolve(out.format) == out.content_type


def test_default_accept_from_settings():
    from content_negotiation.config.settings import Settings

    cfg = Settings(default_accept="application/json")
    negotiator = Negotiator(ContentTypeRegistry(cfg), cfg)
    out = negotiator.negotiate(_req(allowed_formats=["json", "html"]))
    assert out.format == "json"
    assert not negotiator.negotiate(_req()).ok


def test_failure_error_details():
    failure = NegotiationFailure(
        reason=FailureReason.UNMATCHED_CANDIDATE, format="html", candidates=["html"]
    )
    err = failure.to_error()
    assert err.status_code == 500
    assert err.code == "UNDEFINED_FORMAT"
    assert err.details == {
        "reason": "unmatched_candidate",
        "format": "html",
        "candidates": ["html"],
    }
