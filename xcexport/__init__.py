"""
xcexport: Interactive Xcode archive export and signing.

Selects a previously built .xcarchive, detects the provisioning profile it was
signed with, and re-exports it as an installable .ipa through xcodebuild.
"""

__version__ = "1.0.0"
__author__ = "xcexport Team"
