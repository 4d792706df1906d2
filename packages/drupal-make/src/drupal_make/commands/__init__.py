# SPDX-License-Identifier: MIT
"""CLI commands for drupal-make."""
