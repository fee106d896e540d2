import pytest
from prefect.testing.utilities import prefect_test_harness


@pytest.fixture(autouse=True, scope="session")
def prefect_test_fixture():
    # flows run against a throwaway Prefect database
    with prefect_test_harness():
        yield
