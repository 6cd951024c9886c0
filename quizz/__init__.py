"""
QuiZz - a single-session trivia engine with timed hints and a score ladder.
"""
