"""Prompt Builder - Construct LLM prompts for commit message generation."""

import re


class PromptBuilder:
    """Wraps a git diff in the commit-message instruction template."""

    def build(self, diff: str) -> str:
        sections = [
            self._build_role_section(),
            self._build_format_section(),
            self._build_content_section(),
            self._build_analysis_section(),
            self._build_diff_section(diff),
            self._build_final_instructions(),
        ]
        return "\n\n".join(sections)

    def _build_role_section(self) -> str:
        return ("You are an expert software engineer with years of experience writing clear, "
                "professional commit messages that follow industry best practices.\n\n"
                "Analyze the following git diff and generate a commit message that:")

    def _build_format_section(self) -> str:
        return """**Format Requirements:**
- Subject line: 50 characters or less, imperative mood (e.g., "Add", "Fix", "Update", "Remove")
- Use conventional commit format when appropriate (feat:, fix:, docs:, refactor:, etc.)
- If the change is complex, include a brief body (optional, max 72 chars per line)"""

    def _build_content_section(self) -> str:
        return """**Content Guidelines:**
- Focus on WHAT changed and WHY, not HOW
- Be specific but concise
- Use present tense, imperative mood ("Add feature" not "Added feature")
- Avoid generic messages like "update code" or "fix bug"
- For multiple related changes, focus on the primary purpose"""

    def _build_analysis_section(self) -> str:
        return """**Context Analysis:**
- Look for new files, modified files, deletions
- Identify the type of change: feature, bugfix, refactor, docs, test, etc.
- Consider the scope: which components/modules are affected"""

    def _build_diff_section(self, diff: str) -> str:
        return f"Git diff:\n{diff.rstrip()}"

    def _build_final_instructions(self) -> str:
        return ("Return ONLY the commit message (subject line + optional body if needed). "
                "No explanations, comments, or additional text.")


_FENCE_RE = re.compile(r'^```[\w-]*\s*$')
_PREAMBLE_RE = re.compile(r"^(sure|here(?:'s| is)|certainly)\b.*:\s*$", re.IGNORECASE)


def clean_commit_message(text: str) -> str:
    """Strip code fences and a leading chatty preamble from a model reply."""
    lines = [line for line in text.strip().split('\n') if not _FENCE_RE.match(line.strip())]

    while lines and (not lines[0].strip() or _PREAMBLE_RE.match(lines[0].strip())):
        lines.pop(0)

    if lines:
        lines[0] = lines[0].strip('`').strip()

    return '\n'.join(lines).strip()
