from returns.result import Failure

from kata_scorer.collectors import GateCollector, find_gate_spec
from kata_scorer.collectors.gate import GATE_FAIL, GATE_MISSING, GATE_PASS


def test_missing_gate_spec_fails_without_running_anything(project, fake_executor):
    executor = fake_executor()
    outcome = GateCollector(executor, project).collect()

    assert outcome.passed.value is False
    assert outcome.spec_path is None
    assert outcome.status == GATE_MISSING
    assert executor.calls == []


def test_candidates_are_searched_in_priority_order(project, write_file):
    write_file("spec/original_spec.rb")
    assert find_gate_spec(project) == "spec/original_spec.rb"
    write_file("spec/golden_master_spec.rb")
    assert find_gate_spec(project) == "spec/golden_master_spec.rb"
    write_file("golden_master_spec.rb")
    assert find_gate_spec(project) == "golden_master_spec.rb"


def test_gate_passes_on_zero_exit_status(project, write_file, fake_executor, tool_output):
    write_file("golden_master_spec.rb")
    executor = fake_executor({"rspec": tool_output("....F\n1 failure", exit_code=0)})

    outcome = GateCollector(executor, project).collect()

    assert outcome.passed.value is True
    assert outcome.status == GATE_PASS
    assert executor.calls == [["rspec", "golden_master_spec.rb", "--format", "progress"]]


def test_gate_fails_on_nonzero_exit_status(project, write_file, fake_executor, tool_output):
    write_file("golden_master_spec.rb")
    executor = fake_executor({"rspec": tool_output("30 examples, 0 failures", exit_code=1)})
    outcome = GateCollector(executor, project).collect()
    assert outcome.passed.value is False
    assert outcome.status == GATE_FAIL


def test_gate_fails_when_runner_is_unavailable(project, write_file, fake_executor):
    write_file("golden_master_spec.rb")
    executor = fake_executor(handler=lambda argv: Failure("Command not found: rspec"))
    assert GateCollector(executor, project).collect().passed.value is False
