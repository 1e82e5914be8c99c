"""
Room search and location matching service for the hotel booking app.
"""
