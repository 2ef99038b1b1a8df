# Test Nullable Return
#
# @returns {?string} maybestring
#   not sure
def main():
    return None
