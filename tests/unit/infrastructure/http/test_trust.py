from __future__ import annotations

import httpx
import pytest

from restwire.config.settings import RestSettings
from restwire.infrastructure.http.controller import RestController
from restwire.infrastructure.http.trust import (
    SameHostTrustTransport,
    TrustPolicy,
    grants_self_signed,
)

HOST = "api.restwire.test"


@pytest.mark.parametrize(
    ("policy", "challenge", "base", "granted"),
    [
        (TrustPolicy.SAME_HOST_SELF_SIGNED, HOST, HOST, True),
        (TrustPolicy.SAME_HOST_SELF_SIGNED, "API.Restwire.TEST", HOST, True),
        (TrustPolicy.SAME_HOST_SELF_SIGNED, "evil.test", HOST, False),
        (TrustPolicy.SAME_HOST_SELF_SIGNED, f"sub.{HOST}", HOST, False),
        (TrustPolicy.SAME_HOST_SELF_SIGNED, "restwire.test", HOST, False),
        (TrustPolicy.SAME_HOST_SELF_SIGNED, "", HOST, False),
        (TrustPolicy.SAME_HOST_SELF_SIGNED, HOST, "", False),
        (TrustPolicy.DEFAULT, HOST, HOST, False),
    ],
)
def test_grants_self_signed_requires_exact_host(
    policy: TrustPolicy, challenge: str, base: str, granted: bool
) -> None:
    assert grants_self_signed(policy, challenge, base) is granted


def _labelled(label: str) -> httpx.MockTransport:
    return httpx.MockTransport(lambda _request: httpx.Response(200, text=label))


@pytest.fixture
def transport() -> SameHostTrustTransport:
    return SameHostTrustTransport(
        HOST,
        policy=TrustPolicy.SAME_HOST_SELF_SIGNED,
        verified=_labelled("verified"),
        unverified=_labelled("unverified"),
    )


@pytest.mark.anyio
@pytest.mark.parametrize(
    ("url", "label"),
    [
        (f"https://{HOST}/get", "unverified"),
        (f"https://{HOST}:8443/get", "unverified"),
        ("https://other.restwire.test/get", "verified"),
        (f"http://{HOST}/get", "verified"),
    ],
)
async def test_transport_relaxes_verification_only_for_base_host(
    transport: SameHostTrustTransport, url: str, label: str
) -> None:
    async with httpx.AsyncClient(transport=transport) as http:
        response = await http.get(url)
    assert response.text == label


@pytest.mark.anyio
async def test_default_policy_always_verifies(transport: SameHostTrustTransport) -> None:
    transport.policy = TrustPolicy.DEFAULT
    async with httpx.AsyncClient(transport=transport) as http:
        response = await http.get(f"https://{HOST}/get")
    assert response.text == "verified"


@pytest.mark.anyio
async def test_redirect_to_other_host_uses_verified_transport() -> None:
    def base_host(request: httpx.Request) -> httpx.Response:
        return httpx.Response(302, headers={"Location": "https://elsewhere.test/landing"})

    transport = SameHostTrustTransport(
        HOST,
        policy=TrustPolicy.SAME_HOST_SELF_SIGNED,
        verified=_labelled("verified"),
        unverified=httpx.MockTransport(base_host),
    )
    async with httpx.AsyncClient(transport=transport, follow_redirects=True) as http:
        response = await http.get(f"https://{HOST}/start")

    assert response.text == "verified"
    assert response.url.host == "elsewhere.test"


def test_unverified_transport_is_created_lazily() -> None:
    transport = SameHostTrustTransport(HOST, verified=_labelled("verified"))
    assert transport._unverified is None

    transport.policy = TrustPolicy.SAME_HOST_SELF_SIGNED
    selected = transport.select(httpx.Request("GET", f"https://{HOST}/"))

    assert isinstance(selected, httpx.AsyncHTTPTransport)
    assert transport.select(httpx.Request("GET", f"https://{HOST}/")) is selected
    assert transport.host == HOST


@pytest.mark.anyio
async def test_controller_flag_drives_transport_policy() -> None:
    controller = RestController(
        f"https://{HOST}", settings=RestSettings(), accept_self_signed_certificate=True
    )
    async with controller:
        assert controller.accept_self_signed_certificate is True
        assert controller._trust is not None
        assert controller._trust.host == HOST
        assert controller._trust.policy is TrustPolicy.SAME_HOST_SELF_SIGNED

        controller.accept_self_signed_certificate = False
        assert controller._trust.policy is TrustPolicy.DEFAULT


@pytest.mark.anyio
async def test_controller_flag_defaults_from_settings() -> None:
    settings = RestSettings(accept_self_signed_certificate=True)
    async with RestController(f"https://{HOST}", settings=settings) as controller:
        assert controller.accept_self_signed_certificate is True


@pytest.mark.anyio
async def test_controller_flag_has_no_effect_on_injected_client(
    caplog: pytest.LogCaptureFixture,
) -> None:
    async with httpx.AsyncClient() as http:
        with caplog.at_level("WARNING"):
            controller = RestController(
                f"https://{HOST}",
                settings=RestSettings(),
                http=http,
                accept_self_signed_certificate=True,
            )
        assert controller._trust is None
        assert any(r.getMessage() == "restwire.self_signed_ignored" for r in caplog.records)
