# @returns {number} hello
def main():
    return 1
