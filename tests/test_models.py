"""Tests for launch request and result models."""

import dataclasses
import unittest

from bgrun.exceptions import LaunchError, LaunchErrorKind
from bgrun.models import LaunchRequest, LaunchResult, OutputMode, ResultKind, Span


class TestLaunchRequest(unittest.TestCase):
    """Test LaunchRequest construction."""

    def test_mode_from_flags(self) -> None:
        """Test that switches map onto output modes."""
        self.assertEqual(LaunchRequest.from_flags("ls").mode, OutputMode.DETACHED)
        self.assertEqual(LaunchRequest.from_flags("ls", pid=True).mode, OutputMode.RETURN_PID)
        self.assertEqual(LaunchRequest.from_flags("ls", capture=True).mode, OutputMode.CAPTURE_OUTPUT)

    def test_capture_with_pid_keeps_pid_flag(self) -> None:
        """Test that capture wins the mode but the pid request is kept."""
        request = LaunchRequest.from_flags("ls", pid=True, capture=True)
        self.assertEqual(request.mode, OutputMode.CAPTURE_OUTPUT)
        self.assertTrue(request.pid)

    def test_arguments_stored_as_tuple_in_order(self) -> None:
        """Test that argument lists are copied into an immutable tuple."""
        args = ["b", "a", "c"]
        request = LaunchRequest("ls", args)  # type: ignore[arg-type]
        args.append("d")
        self.assertEqual(request.arguments, ("b", "a", "c"))

    def test_request_is_frozen(self) -> None:
        """Test that a request cannot be modified after construction."""
        request = LaunchRequest("ls")
        with self.assertRaises(dataclasses.FrozenInstanceError):
            request.command = "rm"  # type: ignore[misc]

    def test_describe(self) -> None:
        """Test the diagnostic name with and without arguments."""
        self.assertEqual(LaunchRequest("ls").describe(), "'ls'")
        self.assertEqual(LaunchRequest("ls", ("-l", "a b")).describe(), "'ls' with args ['-l', 'a b']")

    def test_argv(self) -> None:
        """Test the argument vector handed to process creation."""
        self.assertEqual(LaunchRequest("echo", ("x", "y")).argv(), ["echo", "x", "y"])

    def test_span_does_not_affect_equality(self) -> None:
        """Test that the source location is ignored when comparing requests."""
        self.assertEqual(LaunchRequest("ls", command_span=Span(0, 2)), LaunchRequest("ls"))


class TestLaunchResult(unittest.TestCase):
    """Test LaunchResult values."""

    def test_native_values(self) -> None:
        """Test mapping results to native Python values."""
        self.assertIsNone(LaunchResult.empty().to_value())
        self.assertEqual(LaunchResult.of_pid(42).to_value(), 42)
        self.assertEqual(LaunchResult.of_text("hi").to_value(), "hi")

    def test_kinds(self) -> None:
        """Test that each constructor sets its kind."""
        self.assertEqual(LaunchResult.empty().kind, ResultKind.EMPTY)
        self.assertEqual(LaunchResult.of_pid(1).kind, ResultKind.PID)
        self.assertEqual(LaunchResult.of_text("").kind, ResultKind.TEXT)

    def test_to_dict(self) -> None:
        """Test JSON serialization of results."""
        self.assertEqual(LaunchResult.of_pid(7).to_dict(), {"type": "pid", "value": 7})
        self.assertEqual(LaunchResult.empty().to_dict(), {"type": "empty", "value": None})


class TestLaunchError(unittest.TestCase):
    """Test LaunchError attributes."""

    def test_str_is_message(self) -> None:
        """Test that str() of the error is its detailed message."""
        error = LaunchError(LaunchErrorKind.NO_COMMAND, "No command given", "A command is required")
        self.assertEqual(str(error), "A command is required")

    def test_to_dict(self) -> None:
        """Test JSON serialization of errors."""
        error = LaunchError(LaunchErrorKind.NON_ZERO_EXIT, "label", "msg", span=Span(1, 3), exit_code=2)
        self.assertEqual(
            error.to_dict(),
            {"kind": "non_zero_exit", "label": "label", "message": "msg", "span": [1, 3], "exit_code": 2},
        )


if __name__ == "__main__":
    unittest.main()
