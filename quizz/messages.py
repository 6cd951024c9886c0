"""
User-visible texts emitted by the quiz session.
"""

NO_QUESTIONS = "I have no questions left."
ALREADY_RUNNING = "I am already asking questions."
NOT_RUNNING = "I am not asking any question right now."
STOPPED = "I see the uncultured no longer wish to improve their culture."
TOO_SOON = "Try searching a bit first, it might be interesting."
NO_MORE_HINTS = "No further help available, you are on your own."
ANSWER_WAS = "The answer was: {answer}."
NEXT_QUESTION_IN = "Next question in {delay} seconds."
CONGRATULATIONS = "Well done {name}! The answer was: {answer}. (+{points} {unit})"
LADDER_LINE = "{rank}. {name} ({score})"

HELP_LINES = (
    "{prefix}start - ask a question",
    "{prefix}stop - stop the quiz",
    "{prefix}repeat - repeat the current question",
    "{prefix}hint - reveal part of the answer (every {hint_cooldown} seconds)",
    "{prefix}next - skip the question (after {next_cooldown} seconds)",
    "{prefix}ladder - show the top {ladder_size} players",
    "{prefix}help - show this list",
)


def format_seconds(seconds: float) -> str:
    return f"{seconds:g}"


def congratulations(name: str, answer: str, points: int) -> str:
    unit = "point" if points == 1 else "points"
    return CONGRATULATIONS.format(name=name, answer=answer, points=points, unit=unit)


def next_question_in(delay: float) -> str:
    return NEXT_QUESTION_IN.format(delay=format_seconds(delay))


def ladder_line(rank: int, name: str, score: int) -> str:
    return LADDER_LINE.format(rank=rank, name=name, score=score)


def help_lines(prefix: str, hint_cooldown: float, next_cooldown: float, ladder_size: int):
    return [
        line.format(
            prefix=prefix,
            hint_cooldown=format_seconds(hint_cooldown),
            next_cooldown=format_seconds(next_cooldown),
            ladder_size=ladder_size,
        )
        for line in HELP_LINES
    ]
