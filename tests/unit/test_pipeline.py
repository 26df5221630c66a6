"""Unit tests for the pipeline logging commands."""
import io

from trafficmonitor import pipeline
from trafficmonitor.pipeline import TaskResult


def test_format_command():
    assert pipeline.format_command("task.debug", "hello") == "##vso[task.debug]hello"
    assert (
        pipeline.format_command("task.logissue", "bad", type="error")
        == "##vso[task.logissue type=error;]bad"
    )


def test_escaping():
    assert pipeline.escape_data("50%\r\nnext") == "50%AZP25%0D%0Anext"
    assert pipeline.escape_property("a;b]c") == "a%3Bb%5Dc"


def test_stream_output():
    stream = io.StringIO()
    pipeline.log_error("one", stream=stream)
    pipeline.log_debug("three", stream=stream)
    pipeline.set_result(TaskResult.FAILED, "done", stream=stream)

    assert stream.getvalue().splitlines() == [
        "##vso[task.logissue type=error;]one",
        "##vso[task.debug]three",
        "##vso[task.complete result=Failed;]done",
    ]


def test_defaults_to_stdout(capsys):
    pipeline.set_result(TaskResult.SUCCEEDED)
    assert capsys.readouterr().out == "##vso[task.complete result=Succeeded;]\n"
