# Find records
#
# @param {object.keyql.query} where Filters to apply
# @param {object.keyql.limit} limit Pagination
# @returns {array} The matching records
# @ {object} record
# @   {string} first_name
def main(where={}, limit={"count": 10, "offset": 0}):
    return []
