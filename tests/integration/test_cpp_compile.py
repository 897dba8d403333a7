"""Compile generated headers with a real C++17 compiler and probe them."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from typing import Dict

import pytest

from rescom.generators import LegacyCppGenerator
from rescom.generators.formatting import namespace_name
from rescom.models import Configuration
from tests._fixtures.resource_builder import ResourceBuilder

_COMPILER = shutil.which("g++") or shutil.which("clang++")

pytestmark = pytest.mark.skipif(_COMPILER is None, reason="no C++17 compiler on PATH")

_PROBE = r"""
#include "resources.hpp"
#include <cstdio>

namespace res = rescom::{namespace};

int main(int argc, char** argv)
{{
    for (int i = 1; i < argc; ++i) {{
        char const* key = argv[i];
        auto const text = res::getText(key);
        std::printf("%s %d %u ", key, res::contains(key) ? 1 : 0, res::getResource(key).size);
        for (auto c : text)
            std::printf("%02x", static_cast<unsigned int>(static_cast<unsigned char>(c)));
        std::printf("\n");
    }}
    std::printf("null %d %u\n", res::contains(nullptr) ? 1 : 0, res::getResource(nullptr).size);
    std::printf("count %d\n", static_cast<int>(res::end() - res::begin()));
    for (auto it = res::begin(); it != res::end(); ++it)
        std::printf("# %s\n", it->key);
    return 0;
}}
"""

_STATIC_CHECKS = r"""
#include "resources.hpp"

namespace res = rescom::scenario;

static_assert(res::contains("a"));
static_assert(res::contains("b"));
static_assert(!res::contains("z"));
static_assert(!res::contains(nullptr));
static_assert(res::getResource("a").size == 2);
static_assert(res::getText("a") == "AB");
static_assert(res::getResource("b").size == 0);
static_assert(res::getResource("z").size == 0);
static_assert(res::getResource("z").key == nullptr);
static_assert(res::end() - res::begin() == 2);

int main() { return 0; }
"""


def _build(tmp_path: Path, header: str, source: str, name: str) -> Path:
    (tmp_path / "resources.hpp").write_text(header, encoding="utf-8")
    (tmp_path / f"{name}.cpp").write_text(source, encoding="utf-8")
    binary = tmp_path / name
    result = subprocess.run(
        [_COMPILER, "-std=c++17", "-Wall", "-I", str(tmp_path), str(tmp_path / f"{name}.cpp"), "-o", str(binary)],
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0, result.stderr
    return binary


def _probe(tmp_path: Path, configuration: Configuration, *keys: str) -> Dict[str, str]:
    header = LegacyCppGenerator().render(configuration)
    binary = _build(
        tmp_path,
        header,
        _PROBE.format(namespace=namespace_name(configuration.identity)),
        "probe",
    )
    result = subprocess.run([str(binary), *keys], capture_output=True, text=True, check=True)
    lines: Dict[str, str] = {}
    for line in result.stdout.splitlines():
        label, _, rest = line.partition(" ")
        if label == "#":
            lines.setdefault("keys", "")
            lines["keys"] += rest + ";"
        else:
            lines[label] = rest
    return lines


@pytest.mark.parametrize("compile_time", [True, False], ids=["constexpr", "runtime"])
def test_scenario_lookups(resource_builder: ResourceBuilder, tmp_path: Path, compile_time: bool) -> None:
    configuration = resource_builder.configuration(
        {"a": b"AB", "b": b""}, identity="scenario", compile_time=compile_time
    )

    result = _probe(tmp_path, configuration, "a", "b", "z", "")

    assert result["a"] == "1 2 4142"
    assert result["b"] == "1 0 "
    assert result["z"] == "0 0 "
    assert result["null"] == "0 0"
    assert result["count"] == "2"
    assert result["keys"] == "a;b;"


@pytest.mark.parametrize("compile_time", [True, False], ids=["constexpr", "runtime"])
def test_zero_inputs_have_empty_range(tmp_path: Path, compile_time: bool) -> None:
    configuration = Configuration(inputs=[], identity="nothing", compile_time=compile_time)

    result = _probe(tmp_path, configuration, "a")

    assert result["a"] == "0 0 "
    assert result["null"] == "0 0"
    assert result["count"] == "0"
    assert "keys" not in result


@pytest.mark.parametrize("compile_time", [True, False], ids=["constexpr", "runtime"])
def test_binary_contents_round_trip(
    resource_builder: ResourceBuilder, tmp_path: Path, compile_time: bool
) -> None:
    files = {
        "all": bytes(range(256)),
        "big": bytes((index * 31 + 7) % 256 for index in range(6000)),
        "empty": b"",
        "one": b"\x80",
        "zero": b"\x00",
    }
    configuration = resource_builder.configuration(
        files, identity="blobs", compile_time=compile_time
    )

    result = _probe(tmp_path, configuration, *files)

    for key, content in files.items():
        assert result[key] == f"1 {len(content)} {content.hex()}"
    assert result["keys"] == "all;big;empty;one;zero;"


def test_many_keys_are_all_found(resource_builder: ResourceBuilder, tmp_path: Path) -> None:
    files = {f"key{index:03d}": str(index).encode() for index in range(37)}
    configuration = resource_builder.configuration(files, identity="many")

    result = _probe(tmp_path, configuration, *files, "key", "key999", "a", "zzz")

    for key, content in files.items():
        assert result[key] == f"1 {len(content)} {content.hex()}"
    for absent in ("key", "key999", "a", "zzz"):
        assert result[absent] == "0 0 "


def test_lookups_evaluate_at_compile_time(resource_builder: ResourceBuilder, tmp_path: Path) -> None:
    configuration = resource_builder.configuration({"a": b"AB", "b": b""}, identity="scenario")
    header = LegacyCppGenerator().render(configuration)

    _build(tmp_path, header, _STATIC_CHECKS, "static_checks")


@pytest.mark.parametrize("identity", ["default", "new", "3d", "My__Assets"])
def test_awkward_identities_compile(
    resource_builder: ResourceBuilder, tmp_path: Path, identity: str
) -> None:
    configuration = resource_builder.configuration({"a": b"AB"}, identity=identity)

    result = _probe(tmp_path, configuration, "a")

    assert result["a"] == "1 2 4142"
    assert result["count"] == "1"
