from __future__ import annotations

import io
from pathlib import Path

import pytest
from rich.console import Console

from core.config import AppSettings
from core.domain.models import NetworkContext
from core.network_loader import load_network_context
from core.services.address_resolver import AddressResolver
from core.services.views import ViewRuntime

from _nctl_helpers import FakeBackend, write_network


@pytest.fixture
def nctl_home(tmp_path: Path) -> Path:
    home = tmp_path / "nctl"
    write_network(home)
    return home


@pytest.fixture
def settings(nctl_home: Path) -> AppSettings:
    return AppSettings(NCTL_HOME=str(nctl_home), _env_file=None)


@pytest.fixture
def network(settings: AppSettings) -> NetworkContext:
    return load_network_context(1, settings)


@pytest.fixture
def resolver(network: NetworkContext, settings: AppSettings) -> AddressResolver:
    return AddressResolver(network, settings)


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def console(output: io.StringIO) -> Console:
    return Console(file=output, width=200, color_system=None, force_terminal=False)


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def runtime(resolver: AddressResolver, console: Console, backend: FakeBackend) -> ViewRuntime:
    return ViewRuntime(resolver=resolver, console=console, backend=backend, chain=backend)
