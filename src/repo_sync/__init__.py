"""Repo Sync - clone and update plugin repositories."""
