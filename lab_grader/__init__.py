"""
Lab Grader: Static autograder for the 6-2 Node/Express lab.

Scores a student's working tree with text-pattern checks over the submitted
sources and a deadline check against the last commit timestamp.
"""

__version__ = "0.1.0"
