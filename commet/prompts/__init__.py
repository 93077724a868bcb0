"""Prompt Construction Package"""

from commet.prompts.builder import PromptBuilder, clean_commit_message

__all__ = ["PromptBuilder", "clean_commit_message"]
