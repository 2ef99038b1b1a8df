# Test multi line descriptions
# This is a second line
# This is a third line
#
# This is a fourth line
#
#
# @returns {any}
def main():
    return None
