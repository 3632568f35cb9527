# SPDX-License-Identifier: Apache-2.0

"""
Routes package - API blueprints.
"""
