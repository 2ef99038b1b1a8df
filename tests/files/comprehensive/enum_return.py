# Test Enum Returns
#
# @returns {enum} a or b
#   "a"
#   "b"
def main(context):
    return "a"
