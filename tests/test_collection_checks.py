from perfharness.harness import PerformanceHarness
from perfharness.scenarios import CollectionChecks, run_collection_checks


def test_sample_list():
    assert CollectionChecks.create_sample_list(3) == ["test data"] * 3


def test_each_case_counts_when_list_has_items():
    checks = CollectionChecks(40)

    for _, operation in checks.cases():
        operation()

    assert checks.hits == 4


def test_empty_list_never_counts():
    checks = CollectionChecks(0)

    for _, operation in checks.cases():
        operation()

    assert checks.hits == 0


def test_run_collection_checks_reports_every_case():
    lines = []
    harness = PerformanceHarness(output=lines.append)

    checks = run_collection_checks(harness, iterations=10, warmup_ms=0, list_size=5)

    assert [line.split(":")[0] for line in lines] == [name for name, _ in checks.cases()]
    assert all(line.endswith(" ms/per run") for line in lines)
    assert checks.hits == 40
