# @param {notatype} broken
def main(broken):
    return broken
