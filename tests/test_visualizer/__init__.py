"""HTTP API tests"""
