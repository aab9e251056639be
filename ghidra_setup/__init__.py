"""ghidra-setup — install Ghidra and its JDK on macOS via Homebrew."""

__version__ = "0.1.0"
