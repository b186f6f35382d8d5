"""
Test package for soap-do.

This package contains:
- test_conformance.py: Wire conformance tests from YAML cases
- test_client.py: SoapClient tests against a mocked HTTP transport
- test_transport.py: HttpxTransport tests
- test_serializer.py / test_deserializer.py: element tree mapping tests
- test_fault.py: SOAP 1.1 and 1.2 fault extraction tests
- test_classify.py / test_names.py / test_values.py: wire convention helpers
- test_config.py / test_errors.py: configuration and error hierarchy
- models.py: Record types shared by the tests
- conftest.py: Pytest configuration and fixtures
"""
