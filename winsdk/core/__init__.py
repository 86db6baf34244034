# SPDX-License-Identifier: MIT
"""Core SDK model and resolution logic."""
