# SPDX-License-Identifier: MIT
"""Application services for relpub.

Services implement the publish flow, coordinating between the domain layer
(core/, release/) and infrastructure (platform/).
"""
