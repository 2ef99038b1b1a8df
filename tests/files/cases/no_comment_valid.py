def main(name="anonymous", retries=3, verbose=False):
    return name
