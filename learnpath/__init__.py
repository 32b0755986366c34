"""
LearnPath - Personal learning-progress engine.

Derives completion state from a course catalog and a learner's activity,
resolves where a learner should resume, and scores quizzes.
"""

__version__ = "0.1.0"
