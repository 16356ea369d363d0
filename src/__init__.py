"""Gym Enrollment Service.

Student plan enrollments for a gym management backend: start date
validation, pricing, persistence and confirmation email.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
