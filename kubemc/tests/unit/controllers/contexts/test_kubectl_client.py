"""Tests for the context-scoped kubectl client."""

from __future__ import annotations

import json
import subprocess
from unittest.mock import MagicMock, patch

import pytest

from kubemc.controllers.contexts.client import (
    GroupVersionResource,
    KubectlClient,
    _run_kubectl_sync,
    run_kubectl,
)
from kubemc.controllers.contexts.kubeconfig import ContextProfile
from kubemc.controllers.errors import ListError, ProbeTimeoutError, ProcessExecutionError

SYNC_TARGET = "kubemc.controllers.contexts.client._run_kubectl_sync"


class TestGroupVersionResource:
    """Tests for GroupVersionResource.parse."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("pods", ("", "", "pods")),
            ("v1/pods", ("", "v1", "pods")),
            ("apps/v1/deployments", ("apps", "v1", "deployments")),
            ("deployments.v1.apps", ("apps", "v1", "deployments")),
            ("cronjobs.v1beta1.batch", ("batch", "v1beta1", "cronjobs")),
            ("volumes.longhorn.io", ("longhorn.io", "", "volumes")),
            ("deployments.apps", ("apps", "", "deployments")),
        ],
    )
    def test_parse(self, value: str, expected: tuple[str, str, str]) -> None:
        gvr = GroupVersionResource.parse(value)
        assert (gvr.group, gvr.version, gvr.resource) == expected

    @pytest.mark.parametrize("value", ["", "  ", "a/b/c/d"])
    def test_parse_invalid(self, value: str) -> None:
        with pytest.raises(ValueError):
            GroupVersionResource.parse(value)

    def test_kubectl_name(self) -> None:
        assert GroupVersionResource("", "v1", "pods").kubectl_name == "pods"
        assert GroupVersionResource("apps", "", "deployments").kubectl_name == "deployments.apps"
        assert str(GroupVersionResource("apps", "v1", "deployments")) == "deployments.v1.apps"


class TestRunKubectl:
    """Tests for the kubectl subprocess wrappers."""

    def test_sync_returns_stdout(self) -> None:
        completed = subprocess.CompletedProcess(["kubectl"], 0, stdout="ok\n", stderr="")
        with patch("subprocess.run", return_value=completed) as run:
            assert _run_kubectl_sync(["kubectl", "get", "pods"], 3) == "ok\n"
        run.assert_called_once_with(
            ["kubectl", "get", "pods"],
            capture_output=True,
            text=True,
            timeout=3,
        )

    def test_sync_nonzero_uses_stderr(self) -> None:
        completed = subprocess.CompletedProcess(
            ["kubectl"], 1, stdout="", stderr="error: forbidden\n"
        )
        with patch("subprocess.run", return_value=completed):
            with pytest.raises(ProcessExecutionError) as exc_info:
                _run_kubectl_sync(["kubectl", "get", "pods"], None)
        assert str(exc_info.value) == "error: forbidden"
        assert exc_info.value.returncode == 1
        assert exc_info.value.stderr == "error: forbidden"

    def test_sync_nonzero_without_stderr(self) -> None:
        completed = subprocess.CompletedProcess(["kubectl"], 2, stdout="", stderr="")
        with patch("subprocess.run", return_value=completed):
            with pytest.raises(ProcessExecutionError, match="exit status 2"):
                _run_kubectl_sync(["kubectl"], None)

    def test_sync_missing_binary(self) -> None:
        with patch("subprocess.run", side_effect=FileNotFoundError("kubectl")):
            with pytest.raises(ProcessExecutionError, match="executable not found"):
                _run_kubectl_sync(["kubectl"], None)

    @pytest.mark.asyncio
    async def test_async_prepends_binary(self) -> None:
        with patch(SYNC_TARGET, return_value="out") as sync:
            assert await run_kubectl(["get", "ns"], binary="/opt/kubectl", timeout=7) == "out"
        sync.assert_called_once_with(["/opt/kubectl", "get", "ns"], 7)

    @pytest.mark.asyncio
    async def test_async_timeout(self) -> None:
        with patch(SYNC_TARGET, side_effect=subprocess.TimeoutExpired("kubectl", 1)):
            with pytest.raises(ProbeTimeoutError):
                await run_kubectl(["version"], timeout=1)


class TestKubectlClient:
    """Tests for KubectlClient operations."""

    @pytest.fixture
    def client(self) -> KubectlClient:
        profile = ContextProfile(name="prod", cluster="c", user="u", server="https://c:6443")
        return KubectlClient(profile=profile)

    @pytest.mark.asyncio
    async def test_list_all_namespaces(self, client: KubectlClient) -> None:
        payload = json.dumps({"items": [{"metadata": {"name": "p1"}}]})
        with patch(SYNC_TARGET, return_value=payload) as sync:
            items = await client.list_resources(GroupVersionResource.parse("pods"))

        assert items == [{"metadata": {"name": "p1"}}]
        cmd = sync.call_args.args[0]
        assert cmd[:3] == ["kubectl", "--context", "prod"]
        assert "--all-namespaces" in cmd
        assert cmd[-2:] == ["-o", "json"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("namespace", ["", "-", "all"])
    async def test_list_all_namespace_aliases(
        self,
        client: KubectlClient,
        namespace: str,
    ) -> None:
        with patch(SYNC_TARGET, return_value='{"items": []}') as sync:
            await client.list_resources(GroupVersionResource.parse("pods"), namespace)
        assert "--all-namespaces" in sync.call_args.args[0]

    @pytest.mark.asyncio
    async def test_list_namespace_and_selector(self, client: KubectlClient) -> None:
        with patch(SYNC_TARGET, return_value='{"items": []}') as sync:
            await client.list_resources(
                GroupVersionResource.parse("deployments.v1.apps"), "payments", "app=api"
            )
        cmd = sync.call_args.args[0]
        assert cmd[cmd.index("get") + 1] == "deployments.v1.apps"
        assert cmd[cmd.index("-n") + 1] == "payments"
        assert cmd[cmd.index("-l") + 1] == "app=api"
        assert "--all-namespaces" not in cmd

    @pytest.mark.asyncio
    async def test_list_is_unbounded_by_default(self, client: KubectlClient) -> None:
        with patch(SYNC_TARGET, return_value='{"items": []}') as sync:
            await client.list_resources(GroupVersionResource.parse("pods"))
        assert sync.call_args.args[1] is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("timeout", [None, 300.0, 2.5])
    async def test_list_forwards_timeout(
        self,
        client: KubectlClient,
        timeout: float | None,
    ) -> None:
        with patch(SYNC_TARGET, return_value='{"items": []}') as sync:
            await client.list_resources(GroupVersionResource.parse("pods"), timeout=timeout)
        assert sync.call_args.args[1] == timeout

    @pytest.mark.asyncio
    async def test_list_failure_is_list_error(self, client: KubectlClient) -> None:
        with patch(SYNC_TARGET, side_effect=ProcessExecutionError("forbidden")):
            with pytest.raises(ListError) as exc_info:
                await client.list_resources(GroupVersionResource.parse("pods"))
        assert exc_info.value.context == "prod"
        assert "forbidden" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_list_invalid_json(self, client: KubectlClient) -> None:
        with patch(SYNC_TARGET, return_value="not json"):
            with pytest.raises(ListError, match="invalid JSON"):
                await client.list_resources(GroupVersionResource.parse("pods"))

    @pytest.mark.asyncio
    async def test_server_version(self, client: KubectlClient) -> None:
        payload = json.dumps({"serverVersion": {"gitVersion": "v1.29.2-eks"}})
        with patch(SYNC_TARGET, return_value=payload) as sync:
            assert await client.server_version(5) == "v1.29.2-eks"
        cmd = sync.call_args.args[0]
        assert "--request-timeout=5s" in cmd
        assert sync.call_args.args[1] == 5

    @pytest.mark.asyncio
    async def test_server_version_missing(self, client: KubectlClient) -> None:
        with patch(SYNC_TARGET, return_value='{"clientVersion": {}}'):
            with pytest.raises(ProcessExecutionError) as exc_info:
                await client.server_version()
        assert exc_info.value.context == "prod"

    @pytest.mark.asyncio
    async def test_errors_carry_context(self, client: KubectlClient) -> None:
        with patch(SYNC_TARGET, side_effect=ProcessExecutionError("refused")):
            with pytest.raises(ProcessExecutionError) as exc_info:
                await client.server_version()
        assert exc_info.value.context == "prod"

    @pytest.mark.asyncio
    async def test_check_connectivity(self, client: KubectlClient) -> None:
        payload = json.dumps({"serverVersion": {"gitVersion": "v1.30.0"}})
        with patch(SYNC_TARGET, return_value=payload):
            assert await client.check_connectivity() is True
        with patch(SYNC_TARGET, side_effect=ProcessExecutionError("refused")):
            assert await client.check_connectivity() is False

    @pytest.mark.asyncio
    async def test_describe_namespaced(self, client: KubectlClient) -> None:
        with patch(SYNC_TARGET, return_value="Name: web") as sync:
            body = await client.describe(GroupVersionResource.parse("pods"), "default/web")
        assert body == "Name: web"
        cmd = sync.call_args.args[0]
        assert cmd[3:] == ["describe", "pods", "web", "-n", "default"]

    @pytest.mark.asyncio
    async def test_describe_cluster_scoped(self, client: KubectlClient) -> None:
        with patch(SYNC_TARGET, return_value="Name: n1") as sync:
            await client.describe(GroupVersionResource.parse("nodes"), "n1")
        assert sync.call_args.args[0][3:] == ["describe", "nodes", "n1"]

    def test_client_is_immutable(self, client: KubectlClient) -> None:
        with pytest.raises(AttributeError):
            client.binary = "other"  # type: ignore[misc]


class TestMockedProcess:
    """Sanity check that list parsing tolerates odd payloads."""

    @pytest.mark.asyncio
    async def test_items_not_a_list(self) -> None:
        client = KubectlClient(profile=ContextProfile("c", "c", "u", "https://c"))
        with patch(SYNC_TARGET, MagicMock(return_value='{"items": {}}')):
            assert await client.list_resources(GroupVersionResource.parse("pods")) == []
