"""
cefr_chat - English placement chatbot backend.

One POST endpoint that assigns a CEFR question set per visitor (cookie),
answers a few greetings from a static table and forwards everything else
to an OpenAI chat completion with the question set in the system prompt.
"""

__version__ = "1.0.0"
