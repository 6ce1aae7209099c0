"""Host adapters that give the edit session a real screen."""
