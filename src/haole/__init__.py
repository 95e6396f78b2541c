"""
Haole - HavenMC status CLI tool.

This package queries the live status of the HavenMC Minecraft server
(play.havenmc.jp) through two public status APIs and prints the results,
either as one-shot commands or as a live terminal dashboard.
"""

__version__ = "0.1.0"
__author__ = "KoHaRxnP"
