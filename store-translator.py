from scripts.entry_points import store_translator

if __name__ == "__main__":
    store_translator()
