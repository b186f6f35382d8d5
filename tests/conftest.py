"""
Pytest configuration and fixtures for soap-do tests.

This module provides fixtures for:
- Building SOAP response documents
- A SoapClient wired to httpx.MockTransport, recording every request
- Loading conformance cases from tests/conformance/*.yaml
- Restoring global configuration between tests
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import httpx
import pytest
import yaml

SERVICE_URL = "http://soap.test/Service.asmx"
SERVICE_NAMESPACE = "http://tempuri.org/"
SOAP12 = "http://www.w3.org/2003/05/soap-envelope"
SOAP11 = "http://schemas.xmlsoap.org/soap/envelope/"

CASES_DIR = Path(__file__).parent / "conformance"


def soap_response(body: str, envelope_namespace: str = SOAP12) -> str:
    """Wrap ``body`` in a response envelope."""
    return (
        '<?xml version="1.0" encoding="utf-8"?>'
        f'<soap:Envelope xmlns:soap="{envelope_namespace}">'
        f"<soap:Body>{body}</soap:Body>"
        "</soap:Envelope>"
    )


def result_response(method: str, result: str, namespace: str = SERVICE_NAMESPACE) -> str:
    """A successful response carrying ``<{method}Result>``."""
    return soap_response(
        f'<{method}Response xmlns="{namespace}">'
        f"<{method}Result>{result}</{method}Result>"
        f"</{method}Response>"
    )


# ============================================================================
# Unit Test Fixtures
# ============================================================================

@pytest.fixture
def service_namespace() -> str:
    return SERVICE_NAMESPACE


@pytest.fixture
def recorded_requests() -> list[httpx.Request]:
    """Requests seen by the mock transport, in order."""
    return []


@pytest.fixture
def make_client(recorded_requests: list[httpx.Request]):
    """
    Factory for a SoapClient whose HTTP traffic goes to ``handler``.

    ``handler`` receives the httpx.Request and returns an httpx.Response.
    """
    from soap_do import HttpxTransport, SoapClient

    def factory(
        handler: Callable[[httpx.Request], httpx.Response],
        namespace: str = SERVICE_NAMESPACE,
        **options: Any,
    ) -> SoapClient:
        def recording_handler(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            return handler(request)

        transport = HttpxTransport(transport=httpx.MockTransport(recording_handler))
        client = SoapClient(SERVICE_URL, namespace, transport=transport, **options)
        return client

    return factory


@pytest.fixture
def reset_config():
    """Restore the global soap-do configuration after the test."""
    from soap_do import config

    saved = dict(config._global_config)
    yield config
    config._global_config.clear()
    config._global_config.update(saved)


# ============================================================================
# Conformance Cases
# ============================================================================

def load_conformance_cases(cases_dir: Path) -> list[dict[str, Any]]:
    """Load all conformance cases from YAML files."""
    cases = []
    if not cases_dir.exists():
        return cases

    for case_file in sorted(cases_dir.glob("*.yaml")):
        with open(case_file, encoding="utf-8") as f:
            suite = yaml.safe_load(f)
            if suite and "tests" in suite:
                for test in suite["tests"]:
                    test["_file"] = case_file.name
                    test["_category"] = suite.get("name", case_file.stem)
                    cases.append(test)
    return cases


def pytest_generate_tests(metafunc):
    """Generate test cases from the conformance YAML files."""
    if "conformance_test" in metafunc.fixturenames:
        tests = load_conformance_cases(CASES_DIR)
        metafunc.parametrize(
            "conformance_test",
            tests,
            ids=[f"{t.get('_category', 'test')}::{t['name']}" for t in tests],
        )
