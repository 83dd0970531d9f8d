"""
                Restaurant Menu

Arabic-first restaurant menu backend with a small content-management API:
restaurant settings, categories, menu items and an admin login.

Author: Khalil_Bannouri
Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
__author__ = "Khalil_Bannouri"
