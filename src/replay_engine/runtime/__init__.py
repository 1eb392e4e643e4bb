"""Runtime services shared by the history engine and its hosts."""
