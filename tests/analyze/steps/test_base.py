"""Tests for the Step base classes."""

import pytest

from sdlpatterns.commands.analyze.steps.base import (
    MechanicalStep,
    StepValidationError,
)


class TestMechanicalStep:
    @pytest.mark.asyncio
    async def test_simple_execution(self):
        class CountTypesStep(MechanicalStep[list[str], int]):
            name = "count"

            async def _execute(self, input: list[str]) -> int:
                return len(input)

        step = CountTypesStep()
        assert await step.run(["Query", "User"]) == 2

    @pytest.mark.asyncio
    async def test_validation_failure_raises(self):
        class NonEmptyOnly(MechanicalStep[str, str]):
            name = "non_empty"

            async def _execute(self, input: str) -> str:
                return input.strip()

            def _validate_output(self, output: str) -> None:
                if not output:
                    raise StepValidationError("Must not be empty", {"value": output})

        step = NonEmptyOnly()
        assert await step.run(" type A ") == "type A"

        with pytest.raises(StepValidationError, match="Must not be empty"):
            await step.run("   ")

    @pytest.mark.asyncio
    async def test_no_retry_on_failure(self):
        """Mechanical steps fail fast, no retry."""
        call_count = [0]

        class FailStep(MechanicalStep[int, int]):
            name = "fail"

            async def _execute(self, input: int) -> int:
                call_count[0] += 1
                return -1

            def _validate_output(self, output: int) -> None:
                raise StepValidationError("always fails")

        step = FailStep()
        with pytest.raises(StepValidationError):
            await step.run(1)
        assert call_count[0] == 1


    @pytest.mark.asyncio
    async def test_missing_output_rejected_by_default(self):
        class ForgetfulStep(MechanicalStep[str, str]):
            name = "forgetful"

            async def _execute(self, input: str):
                return None

        with pytest.raises(StepValidationError, match="forgetful produced no output") as exc_info:
            await ForgetfulStep().run("type A")
        assert exc_info.value.details == {"step": "forgetful"}


class TestStepValidationError:
    def test_message_and_details(self):
        err = StepValidationError("something wrong", {"key": "val"})
        assert str(err) == "something wrong"
        assert err.details == {"key": "val"}

    def test_default_details(self):
        err = StepValidationError("oops")
        assert err.details == {}
