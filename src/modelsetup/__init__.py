"""
modelsetup - interactive configuration of model providers.

Usage:
    modelsetup                              # Choose a provider interactively
    modelsetup --auth-choice ollama-api     # Configure a local Ollama server
    modelsetup --auth-choice ollama-api --base-url http://gpu-box:11434 --yes
"""

__version__ = "0.1.0"
