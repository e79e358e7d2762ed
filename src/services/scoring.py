"""Оценка сданного квиза.

Каждый вопрос квиза получает исход ``correct``, ``wrong`` или ``unanswered``.
Правильный ответ даёт один балл, неправильный отнимает ``negative_mark_value``,
если в квизе включены штрафы, пропуск даёт ноль. Проценты округляются
половиной вверх и не опускаются ниже нуля.

Данные приходят от клиента, поэтому оценка не падает на плохом ответе:
всё, что не сопоставляется с вариантом вопроса, считается пропуском.
"""
import math
from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import BaseModel

from src.models.enums import AnswerOutcome
from src.models.quiz import Question, Quiz
from src.models.quiz_result import Answer

CORRECT_MARK = 1.0
UNANSWERED = -1


class ScoreSummary(BaseModel):
    total_score: int = 0
    raw_score: float = 0
    positive_marks: float = 0
    negative_marks: float = 0
    correct_answers: int = 0
    wrong_answers: int = 0
    unanswered: int = 0
    sections: Dict[str, int] = {}
    answers: List[Answer] = []
    negative_marking: bool = True
    negative_mark_value: float = 0.25

    @property
    def question_count(self) -> int:
        return self.correct_answers + self.wrong_answers + self.unanswered


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def percentage(raw_score: float, question_count: int) -> int:
    if question_count <= 0:
        return 0
    return max(0, round_half_up(raw_score / question_count * 100))


def resolve_selection(question: Question, selected: Any) -> Optional[int]:
    """Индекс варианта для присланного выбора, либо None, если он ни с чем не совпал"""
    if selected is None or isinstance(selected, bool):
        return None
    if isinstance(selected, float):
        if not selected.is_integer():
            return None
        selected = int(selected)
    if isinstance(selected, str):
        text = selected.strip()
        try:
            selected = int(text)
        except ValueError:
            # не индекс, пробуем сам текст варианта
            stripped = [option.strip() for option in question.options]
            return stripped.index(text) if text and text in stripped else None
    if isinstance(selected, int) and 0 <= selected < len(question.options):
        return selected
    return None


def score_question(question: Question, selected: Any, negative_marking: bool,
                   negative_mark_value: float) -> Answer:
    index = resolve_selection(question, selected)
    if index is None:
        outcome, marks = AnswerOutcome.UNANSWERED, 0.0
    elif index == question.correct_answer:
        outcome, marks = AnswerOutcome.CORRECT, CORRECT_MARK
    else:
        outcome = AnswerOutcome.WRONG
        marks = -negative_mark_value if negative_marking else 0.0
    return Answer(
        question_id=question.id,
        section=question.section,
        selected_answer=UNANSWERED if index is None else index,
        correct_answer=question.correct_answer,
        is_correct=outcome == AnswerOutcome.CORRECT,
        outcome=outcome,
        marks=marks,
    )


def selections_by_question(submitted: Iterable[Any]) -> Dict[str, Any]:
    """Ответы по id вопроса; при повторе побеждает последний ответ на вопрос.

    Элементы могут быть словарями или объектами с ``question_id``/``selected_answer``.
    Элементы без пригодного id вопроса отбрасываются.
    """
    selections = {}
    for item in submitted or []:
        if isinstance(item, Mapping):
            question_id, selected = item.get("question_id"), item.get("selected_answer")
        else:
            question_id = getattr(item, "question_id", None)
            selected = getattr(item, "selected_answer", None)
        if isinstance(question_id, (str, int)) and not isinstance(question_id, bool):
            selections[str(question_id)] = selected
    return selections


def _section_score(answers: List[Answer], penalty: float) -> int:
    correct = sum(1 for a in answers if a.outcome == AnswerOutcome.CORRECT)
    wrong = sum(1 for a in answers if a.outcome == AnswerOutcome.WRONG)
    return percentage(correct * CORRECT_MARK - wrong * penalty, len(answers))


def aggregate(quiz: Quiz, answers: List[Answer]) -> ScoreSummary:
    penalty = quiz.negative_mark_value if quiz.negative_marking else 0.0
    correct = sum(1 for a in answers if a.outcome == AnswerOutcome.CORRECT)
    wrong = sum(1 for a in answers if a.outcome == AnswerOutcome.WRONG)
    unanswered = len(answers) - correct - wrong

    positive_marks = correct * CORRECT_MARK
    negative_marks = wrong * penalty
    raw_score = positive_marks - negative_marks

    sections = {
        label: _section_score([a for a in answers if a.section == label], penalty)
        for label in quiz.section_labels()
    }
    return ScoreSummary(
        total_score=percentage(raw_score, len(answers)),
        raw_score=raw_score,
        positive_marks=positive_marks,
        negative_marks=negative_marks,
        correct_answers=correct,
        wrong_answers=wrong,
        unanswered=unanswered,
        sections=sections,
        answers=answers,
        negative_marking=quiz.negative_marking,
        negative_mark_value=quiz.negative_mark_value,
    )


def score_quiz(quiz: Quiz, submitted: Iterable[Any]) -> ScoreSummary:
    selections = selections_by_question(submitted)
    answers = [
        score_question(question, selections.get(question.id), quiz.negative_marking, quiz.negative_mark_value)
        for question in quiz.questions
    ]
    return aggregate(quiz, answers)
