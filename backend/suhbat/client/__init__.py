"""
Client package: API client, chat driver and results view for the terminal front end.
"""

from suhbat.client.api_client import InterviewApiClient, InterviewApiError
from suhbat.client.chat_driver import ChatDriver, ChatMessage, ChatState, Speaker
from suhbat.client.results_renderer import render_results, score_tier
from suhbat.client.results_store import ResultsStore

__all__ = [
    "InterviewApiClient",
    "InterviewApiError",
    "ChatDriver",
    "ChatMessage",
    "ChatState",
    "Speaker",
    "render_results",
    "score_tier",
    "ResultsStore",
]
