from __future__ import annotations

import threading
from pathlib import Path

import pytest

from sponsorlink.adapters import OverrideScanner
from sponsorlink.analyzer import PROJECT_PATH_OPTION, CompilationContext, SponsorLinkAnalyzer
from sponsorlink.descriptors import DescriptorRegistryError
from sponsorlink.models import ResolvedDiagnostic
from sponsorlink.state import AnalysisSession


def make_context(project: Path | str | None, sink: list[ResolvedDiagnostic]) -> CompilationContext:
    options = {} if project is None else {PROJECT_PATH_OPTION: str(project)}
    return CompilationContext(options=options, report=sink.append)


@pytest.fixture
def analyzer() -> SponsorLinkAnalyzer:
    return SponsorLinkAnalyzer("devlooped", "ThisAssembly")


def test_supported_diagnostics_come_from_registry():
    analyzer = SponsorLinkAnalyzer("devlooped", "ThisAssembly", "TA")

    assert [descriptor.id for descriptor in analyzer.supported_diagnostics] == [
        "TASL01",
        "TASL02",
        "TASL03",
        "TASL04",
    ]


def test_registry_failure_is_raised_at_construction():
    with pytest.raises(DescriptorRegistryError):
        SponsorLinkAnalyzer("", "ThisAssembly")


@pytest.mark.parametrize("value", [None, "", "   "])
def test_missing_project_path_is_a_no_op(analyzer, value):
    sink: list[ResolvedDiagnostic] = []
    options = {} if value is None else {PROJECT_PATH_OPTION: value}

    assert analyzer.analyze(CompilationContext(options=options, report=sink.append)) == 0
    assert sink == []


def test_reports_override_files(analyzer, write_override, project_file):
    write_override("SL02.Warning.txt", "  Please sponsor devlooped.  ")
    write_override("SL03.Info.txt", "Thanks!")
    sink: list[ResolvedDiagnostic] = []

    assert analyzer.analyze(make_context(project_file, sink)) == 2
    assert sorted((item.id, item.message) for item in sink) == [
        ("SL02", "Please sponsor devlooped."),
        ("SL03", "Thanks!"),
    ]


def test_second_pass_does_not_report_again(analyzer, write_override, project_file):
    write_override("SL02.Warning.txt", "Please sponsor.")
    sink: list[ResolvedDiagnostic] = []

    analyzer.analyze(make_context(project_file, sink))
    assert analyzer.analyze(make_context(project_file, sink)) == 0

    assert [item.id for item in sink] == ["SL02"]


def test_pending_diagnostic_wins_and_skips_scan(analyzer, write_override, project_file, monkeypatch):
    write_override("SL02.Warning.txt", "from disk")
    pending = ResolvedDiagnostic.create(analyzer.supported_diagnostics[0])
    analyzer.session.pending.push("devlooped", "ThisAssembly", str(project_file), pending)

    def fail_scan(self, state_dir):
        raise AssertionError("state directory must not be scanned")

    monkeypatch.setattr(OverrideScanner, "scan", fail_scan)
    sink: list[ResolvedDiagnostic] = []

    assert analyzer.analyze(make_context(project_file, sink)) == 1
    assert sink == [pending]
    assert analyzer.session.pending.pop("devlooped", "ThisAssembly", str(project_file)) is None


def test_pending_entry_is_consumed_then_files_are_scanned(analyzer, write_override, project_file):
    write_override("SL02.Warning.txt", "from disk")
    analyzer.session.pending.push(
        "devlooped",
        "ThisAssembly",
        str(project_file),
        ResolvedDiagnostic.create(analyzer.supported_diagnostics[3]),
    )
    sink: list[ResolvedDiagnostic] = []

    analyzer.analyze(make_context(project_file, sink))
    analyzer.analyze(make_context(project_file, sink))

    assert [item.id for item in sink] == ["SL04", "SL02"]


def test_other_products_state_is_ignored(analyzer, write_override, project_file):
    write_override("SL02.Warning.txt", "other product", product="Moq")
    sink: list[ResolvedDiagnostic] = []

    assert analyzer.analyze(make_context(project_file, sink)) == 0


def test_missing_state_directory_reports_nothing(analyzer, project_file):
    assert list(analyzer.resolve(make_context(project_file, []))) == []


def test_shared_session_deduplicates_across_analyzer_instances(write_override, project_file):
    write_override("SL02.Warning.txt", "Please sponsor.")
    session = AnalysisSession()
    first = SponsorLinkAnalyzer("devlooped", "ThisAssembly", session=session)
    second = SponsorLinkAnalyzer("devlooped", "ThisAssembly", session=session)
    sink: list[ResolvedDiagnostic] = []

    first.analyze(make_context(project_file, sink))
    second.analyze(make_context(project_file, sink))

    assert len(sink) == 1


def test_concurrent_passes_on_same_project_report_each_id_once(write_override, project_file):
    for name in ("SL01.Warning.txt", "SL02.Warning.txt", "SL04.Warning.txt"):
        write_override(name, f"body of {name}")

    analyzer = SponsorLinkAnalyzer("devlooped", "ThisAssembly")
    sink: list[ResolvedDiagnostic] = []
    lock = threading.Lock()

    def report(diagnostic: ResolvedDiagnostic) -> None:
        with lock:
            sink.append(diagnostic)

    barrier = threading.Barrier(8)

    def worker():
        barrier.wait()
        analyzer.analyze(
            CompilationContext(options={PROJECT_PATH_OPTION: str(project_file)}, report=report)
        )

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sorted(item.id for item in sink) == ["SL01", "SL02", "SL04"]
