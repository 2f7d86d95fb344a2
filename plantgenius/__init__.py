# 📄 File: plantgenius/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Tells Python this folder holds the PlantGenius sign-in, plan and daily-scan code
# and records the package version.
#
# 🧪 Purpose (Technical Summary):
# Package initialization with version metadata for the PlantGenius client
# data/auth layer.
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - Host application, tests

"""
PlantGenius Client Layer - Authentication, Entitlements and Payments

Client-side session management, daily scan entitlements and Paystack
payment relay for the PlantGenius plant identification app.
"""

__version__ = "1.0.0"
__title__ = "PlantGenius Client"
__author__ = "PlantGenius Team"
__author_email__ = "dev@plantgenius.app"
__license__ = "MIT"

__all__ = [
    "__version__",
    "__title__",
    "__author__",
    "__author_email__",
    "__license__",
]
