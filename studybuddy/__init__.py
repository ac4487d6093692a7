"""StudyBuddy: study assistant chat API that turns conversations into quizzes, study plans and notes."""

__version__ = "0.1.0"
