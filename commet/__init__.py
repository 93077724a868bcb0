"""
Commet

AI-assisted git commits with an interactive file picker.
"""

__version__ = "1.0.0"

# Ordered list used by the config editor to cycle providers
PROVIDER_NAMES = ['openai', 'claude', 'google', 'groq']

# Known models per provider; the first entry is the provider default
AVAILABLE_MODELS = {
    'openai': [
        'gpt-4o',
        'gpt-4-turbo',
        'gpt-4',
        'gpt-3.5-turbo',
    ],
    'claude': [
        'claude-3-5-sonnet-20241022',
        'claude-3-opus-20240229',
        'claude-3-sonnet-20240229',
        'claude-3-haiku-20240307',
    ],
    'google': [
        'gemini-1.5-pro',
        'gemini-1.5-flash',
        'gemini-pro',
    ],
    'groq': [
        'llama-3.1-70b-versatile',
        'llama-3.1-8b-instant',
        'mixtral-8x7b-32768',
        'gemma-7b-it',
    ],
}
