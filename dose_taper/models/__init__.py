"""Pydantic models for drugs, patient cases and evaluation results."""
