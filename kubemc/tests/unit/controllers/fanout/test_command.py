"""Tests for command fan-out helpers."""

from __future__ import annotations

from kubemc.controllers.fanout.command import (
    format_results,
    inject_context_flag,
    insert_flags,
)
from kubemc.models.core.context_object import CommandResult


class TestInjectContextFlag:
    """Tests for inject_context_flag."""

    def test_appends_without_separator(self) -> None:
        assert inject_context_flag(["get", "pods"], "a") == ["get", "pods", "--context", "a"]

    def test_inserts_before_separator(self) -> None:
        args = ["exec", "pod", "--", "ls", "-la"]
        assert inject_context_flag(args, "b") == [
            "exec",
            "pod",
            "--context",
            "b",
            "--",
            "ls",
            "-la",
        ]

    def test_only_first_separator(self) -> None:
        args = ["exec", "p", "--", "sh", "-c", "echo --"]
        out = inject_context_flag(args, "c")
        assert out.index("--context") == 2
        assert out[-1] == "echo --"

    def test_input_not_mutated(self) -> None:
        args = ["get", "pods"]
        inject_context_flag(args, "a")
        assert args == ["get", "pods"]

    def test_empty_args(self) -> None:
        assert inject_context_flag([], "a") == ["--context", "a"]

    def test_exec_separator_example(self) -> None:
        assert inject_context_flag(["exec", "p", "--", "ls"], "ctx1") == [
            "exec",
            "p",
            "--context",
            "ctx1",
            "--",
            "ls",
        ]


class TestInsertFlags:
    """Tests for insert_flags."""

    def test_multiple_flags(self) -> None:
        assert insert_flags(["logs", "p", "--"], ["--kubeconfig", "/k"]) == [
            "logs",
            "p",
            "--kubeconfig",
            "/k",
            "--",
        ]


class TestFormatResults:
    """Tests for format_results."""

    def test_success_section(self) -> None:
        out = format_results([CommandResult("prod", "pod/a\n")])
        assert out == "\nprod\n----\npod/a\n"

    def test_error_section(self) -> None:
        out = format_results([CommandResult("dev", "forbidden", RuntimeError("forbidden"))])
        assert out == "\ndev\n---\n  (error) forbidden\n"

    def test_sections_in_order(self) -> None:
        out = format_results(
            [
                CommandResult("a", "one\n"),
                CommandResult("b", "x", RuntimeError("x")),
                CommandResult("c", "three\n"),
            ]
        )
        assert out.index("\na\n") < out.index("\nb\n") < out.index("\nc\n")

    def test_empty(self) -> None:
        assert format_results([]) == ""
