from __future__ import annotations

import pytest

from ecoquest_quiz.core.models import (
    McqQuestion,
    MultiQuestion,
    QuestionType,
    QuizOption,
    ShortQuestion,
    TrueFalseQuestion,
)
from ecoquest_quiz.core.question_editor import MoveDirection


def _ids(question) -> set[str]:
    return {question.id, *(option.id for option in getattr(question, "options", []))}


def test_add_question_appends_blank_mcq(editor, mcq):
    questions, new_id = editor.add_question([mcq])

    assert [q.id for q in questions] == ["q_mcq", new_id]
    added = questions[1]
    assert isinstance(added, McqQuestion)
    assert added.points == 5
    assert added.prompt == ""
    assert [(o.text, o.correct) for o in added.options] == [("", False), ("", False)]


def test_operations_do_not_mutate_input(editor, mcq):
    original = [mcq]
    editor.update_question(original, "q_mcq", prompt="Changed")
    editor.add_option(original, "q_mcq")
    editor.set_correct_option(original, "q_mcq", "o1")

    assert original == [mcq]
    assert mcq.prompt.startswith("What is")
    assert len(mcq.options) == 4
    assert mcq.options[1].correct


def test_update_question_merges_fields(editor, mcq):
    updated = editor.update_question([mcq], "q_mcq", prompt="New prompt", explanation="Because.")
    assert updated[0].prompt == "New prompt"
    assert updated[0].explanation == "Because."
    assert updated[0].options == mcq.options


def test_update_question_clamps_points(editor, mcq):
    assert editor.update_question([mcq], "q_mcq", points=500)[0].points == 100
    assert editor.update_question([mcq], "q_mcq", points=0)[0].points == 1


def test_update_question_rejects_fields_of_other_variants(editor, mcq):
    with pytest.raises(ValueError):
        editor.update_question([mcq], "q_mcq", expected_answer="Paris")


def test_unknown_question_id_is_a_no_op(editor, mcq):
    assert editor.update_question([mcq], "missing", prompt="x") == [mcq]
    assert editor.duplicate_question([mcq], "missing") == [mcq]
    assert editor.move_question([mcq], "missing", "up") == [mcq]


def test_delete_question(editor, mcq, multi):
    assert editor.delete_question([mcq, multi], "q_mcq") == [multi]


def test_duplicate_question_inserts_after_original_with_fresh_ids(editor, mcq, multi):
    questions = editor.duplicate_question([mcq, multi], "q_mcq")

    assert [q.prompt for q in questions] == [mcq.prompt, f"{mcq.prompt} (Copy)", multi.prompt]
    copy = questions[1]
    assert _ids(copy).isdisjoint(_ids(mcq))
    assert [(o.text, o.correct) for o in copy.options] == [(o.text, o.correct) for o in mcq.options]


def test_move_question_swaps_with_neighbour(editor, mcq, multi, short):
    questions = editor.move_question([mcq, multi, short], "q_multi", MoveDirection.UP)
    assert [q.id for q in questions] == ["q_multi", "q_mcq", "q_short"]

    questions = editor.move_question(questions, "q_multi", "down")
    assert [q.id for q in questions] == ["q_mcq", "q_multi", "q_short"]


def test_move_question_is_a_no_op_at_boundaries(editor, mcq, multi):
    assert editor.move_question([mcq, multi], "q_mcq", "up") == [mcq, multi]
    assert editor.move_question([mcq, multi], "q_multi", "down") == [mcq, multi]


def test_add_option_appends_blank_option(editor, mcq):
    question = editor.add_option([mcq], "q_mcq")[0]
    assert len(question.options) == 5
    assert question.options[-1].text == ""
    assert question.options[-1].correct is False


def test_add_option_stops_at_six(editor, mcq):
    questions = [mcq]
    for _ in range(5):
        questions = editor.add_option(questions, "q_mcq")
    assert len(questions[0].options) == 6


def test_delete_option_keeps_a_floor_of_two(editor):
    question = McqQuestion(id="q", options=[QuizOption(id="a"), QuizOption(id="b")])
    assert editor.delete_option([question], "q", "a")[0].options == question.options


def test_delete_option_removes_above_floor(editor, mcq):
    question = editor.delete_option([mcq], "q_mcq", "o3")[0]
    assert [o.id for o in question.options] == ["o1", "o2", "o4"]


def test_update_option_merges_fields(editor, mcq):
    question = editor.update_option([mcq], "q_mcq", "o1", text="Ocean currents")[0]
    assert question.options[0].text == "Ocean currents"
    assert question.options[0].correct is False


def test_true_false_labels_are_fixed(editor, truefalse):
    question = editor.update_option([truefalse], "q_tf", "t", text="Yes", correct=False)[0]
    assert [o.text for o in question.options] == ["True", "False"]
    assert question.options[0].correct is False
    assert editor.add_option([truefalse], "q_tf") == [truefalse]


@pytest.mark.parametrize("fixture_name", ["mcq", "truefalse"])
@pytest.mark.parametrize("prior", [set(), {0}, {0, 1}])
def test_single_answer_exclusivity(request, editor, fixture_name, prior):
    question = request.getfixturevalue(fixture_name)
    options = [
        QuizOption(id=o.id, text=o.text, correct=i in prior) for i, o in enumerate(question.options)
    ]
    question = type(question)(id=question.id, prompt=question.prompt, options=options)
    target = options[-1].id

    updated = editor.set_correct_option([question], question.id, target, is_multi_select=False)[0]

    assert [o.id for o in updated.options if o.correct] == [target]


def test_multi_select_toggle_is_independent(editor, multi):
    before = {o.id: o.correct for o in multi.options}

    updated = editor.set_correct_option([multi], "q_multi", "r3")[0]
    after = {o.id: o.correct for o in updated.options}

    assert after["r3"] is True
    assert {k: v for k, v in after.items() if k != "r3"} == {k: v for k, v in before.items() if k != "r3"}

    toggled_back = editor.set_correct_option([updated], "q_multi", "r3")[0]
    assert {o.id: o.correct for o in toggled_back.options} == before


def test_convert_to_true_false_replaces_options(editor, mcq):
    question = editor.update_question([mcq], "q_mcq", type="truefalse")[0]

    assert isinstance(question, TrueFalseQuestion)
    assert question.id == "q_mcq"
    assert question.prompt == mcq.prompt
    assert [(o.text, o.correct) for o in question.options] == [("True", False), ("False", False)]


def test_convert_to_short_drops_options(editor, mcq):
    question = editor.update_question([mcq], "q_mcq", type=QuestionType.SHORT)[0]

    assert isinstance(question, ShortQuestion)
    assert question.expected_answer == ""
    assert question.points == mcq.points


def test_convert_from_short_initialises_two_options(editor, short):
    question = editor.update_question([short], "q_short", type="multi")[0]

    assert isinstance(question, MultiQuestion)
    assert [(o.text, o.correct) for o in question.options] == [("", False), ("", False)]


def test_convert_between_choice_types_keeps_options(editor, mcq):
    question = editor.update_question([mcq], "q_mcq", type="multi")[0]
    assert isinstance(question, MultiQuestion)
    assert question.options == mcq.options


def test_convert_under_populated_question_gets_two_options(editor):
    question = McqQuestion(id="q", options=[QuizOption(id="only")])
    converted = editor.update_question([question], "q", type="multi")[0]
    assert len(converted.options) == 2
    assert "only" not in {o.id for o in converted.options}


def test_type_change_applies_remaining_changes(editor, mcq):
    question = editor.update_question([mcq], "q_mcq", type="short", expected_answer="CO2")[0]
    assert question.expected_answer == "CO2"
