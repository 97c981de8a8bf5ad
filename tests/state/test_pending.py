import threading
from pathlib import Path

from sponsorlink.descriptors import get_descriptors
from sponsorlink.models import ResolvedDiagnostic
from sponsorlink.state import PendingDiagnostics


def make_diagnostic(index: int = 1) -> ResolvedDiagnostic:
    return ResolvedDiagnostic.create(get_descriptors("devlooped")[index])


def test_pop_returns_pushed_entry_once():
    pending = PendingDiagnostics()
    diagnostic = make_diagnostic()
    pending.push("devlooped", "ThisAssembly", "/src/App/App.csproj", diagnostic)

    assert pending.pop("devlooped", "ThisAssembly", "/src/App/App.csproj") is diagnostic
    assert pending.pop("devlooped", "ThisAssembly", "/src/App/App.csproj") is None
    assert len(pending) == 0


def test_pop_missing_key_returns_none():
    assert PendingDiagnostics().pop("devlooped", "ThisAssembly", "/nowhere.csproj") is None


def test_push_overwrites_existing_entry():
    pending = PendingDiagnostics()
    pending.push("devlooped", "ThisAssembly", "/src/App/App.csproj", make_diagnostic(1))
    latest = make_diagnostic(2)
    pending.push("devlooped", "ThisAssembly", "/src/App/App.csproj", latest)

    assert len(pending) == 1
    assert pending.pop("devlooped", "ThisAssembly", "/src/App/App.csproj") is latest


def test_keys_are_scoped_by_sponsorable_product_and_project():
    pending = PendingDiagnostics()
    diagnostic = make_diagnostic()
    pending.push("devlooped", "ThisAssembly", Path("/src/App/App.csproj"), diagnostic)

    assert pending.pop("devlooped", "Moq", "/src/App/App.csproj") is None
    assert pending.pop("kzu", "ThisAssembly", "/src/App/App.csproj") is None
    assert pending.pop("devlooped", "ThisAssembly", "/src/Lib/Lib.csproj") is None
    assert pending.pop("devlooped", "ThisAssembly", "/src/App/App.csproj") is diagnostic


def test_concurrent_pops_have_a_single_winner():
    pending = PendingDiagnostics()
    diagnostic = make_diagnostic()
    pending.push("devlooped", "ThisAssembly", "/src/App/App.csproj", diagnostic)

    barrier = threading.Barrier(16)
    results = []
    lock = threading.Lock()

    def worker():
        barrier.wait()
        popped = pending.pop("devlooped", "ThisAssembly", "/src/App/App.csproj")
        with lock:
            results.append(popped)

    threads = [threading.Thread(target=worker) for _ in range(16)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert [item for item in results if item is not None] == [diagnostic]
    assert results.count(None) == 15
